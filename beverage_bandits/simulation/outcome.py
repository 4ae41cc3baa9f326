"""Final score of a finished combat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from beverage_bandits.domain.agents import Faction
from beverage_bandits.domain.errors import ContractViolation

if TYPE_CHECKING:
    from beverage_bandits.simulation.engine import CombatEngine


@dataclass(frozen=True)
class Outcome:
    """Completed rounds, winning faction and the product that scores the fight."""

    rounds: int
    winner: Faction
    hp_sum: int
    outcome: int

    def to_dict(self) -> dict[str, object]:
        return {
            "rounds": self.rounds,
            "winner": self.winner.label,
            "hp_sum": self.hp_sum,
            "outcome": self.outcome,
        }


def compute_outcome(engine: CombatEngine) -> Outcome:
    """Score a finished combat: completed rounds times the survivors' hit points."""
    if not engine.finished:
        raise ContractViolation("outcome requested before combat ended")
    survivors = engine.living_agents()
    factions = {agent.faction for agent in survivors}
    if len(factions) != 1:
        raise ContractViolation(f"expected one surviving faction, found {len(factions)}")
    (winner,) = factions
    hp_sum = sum(agent.hp for agent in survivors)
    return Outcome(
        rounds=engine.completed_rounds,
        winner=winner,
        hp_sum=hp_sum,
        outcome=engine.completed_rounds * hp_sum,
    )


def format_outcome(outcome: Outcome) -> str:
    """One-line summary, e.g. ``Goblins win! Round=47, HP=590, Outcome=27730``."""
    return (
        f"{outcome.winner.plural} win! Round={outcome.rounds}, "
        f"HP={outcome.hp_sum}, Outcome={outcome.outcome}"
    )
