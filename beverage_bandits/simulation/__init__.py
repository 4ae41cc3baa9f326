"""Simulation layer: turn engine, outcome scoring, and trace export."""

from beverage_bandits.simulation.engine import (
    Attack,
    CombatEngine,
    CombatObserver,
    RoundResult,
    TurnPhase,
    TurnResult,
    select_attack_target,
)
from beverage_bandits.simulation.outcome import Outcome, compute_outcome, format_outcome

__all__ = [
    "Attack",
    "CombatEngine",
    "CombatObserver",
    "Outcome",
    "RoundResult",
    "TurnPhase",
    "TurnResult",
    "compute_outcome",
    "format_outcome",
    "select_attack_target",
]
