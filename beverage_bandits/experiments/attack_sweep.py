"""Search for the lowest elf attack power that wins without losing an elf.

Each trial replays the same map from scratch with a higher elf attack power.
A trial is abandoned at the end of the first round in which an elf dies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from beverage_bandits.config.types import AttackSweepConfig, CombatConfig
from beverage_bandits.domain.agents import Faction
from beverage_bandits.io.loader import load_combat
from beverage_bandits.io.paths import attack_sweep_path
from beverage_bandits.io.schemas import ATTACK_SWEEP_SCHEMA
from beverage_bandits.simulation.engine import CombatEngine
from beverage_bandits.simulation.outcome import Outcome, compute_outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepTrial:
    """Result of one combat at a fixed elf attack power."""

    elf_attack_power: int
    completed_rounds: int
    elf_deaths: int
    outcome: Outcome | None
    """None when the trial was abandoned after an elf died."""

    @property
    def flawless(self) -> bool:
        return (
            self.outcome is not None
            and self.outcome.winner is Faction.ELF
            and self.elf_deaths == 0
        )

    def to_row(self) -> dict[str, object]:
        return {
            "elf_attack_power": self.elf_attack_power,
            "completed_rounds": self.completed_rounds,
            "elf_deaths": self.elf_deaths,
            "flawless": self.flawless,
            "winner": self.outcome.winner.label if self.outcome else None,
            "hp_sum": self.outcome.hp_sum if self.outcome else None,
            "outcome": self.outcome.outcome if self.outcome else None,
        }


@dataclass(frozen=True)
class SweepResult:
    trials: tuple[SweepTrial, ...]

    @property
    def winning_trial(self) -> SweepTrial | None:
        if self.trials and self.trials[-1].flawless:
            return self.trials[-1]
        return None


def run_trial(map_text: str, config: CombatConfig) -> SweepTrial:
    """Fight one combat, stopping early once any elf has died."""
    engine: CombatEngine = load_combat(map_text, config)
    while not engine.finished:
        if config.max_rounds is not None and engine.completed_rounds >= config.max_rounds:
            break
        engine.step_round()
        if engine.casualties(Faction.ELF):
            break
    elf_deaths = engine.casualties(Faction.ELF)
    outcome = compute_outcome(engine) if engine.finished and not elf_deaths else None
    return SweepTrial(
        elf_attack_power=config.elf_attack_power,
        completed_rounds=engine.completed_rounds,
        elf_deaths=elf_deaths,
        outcome=outcome,
    )


def write_sweep_results(trials: tuple[SweepTrial, ...], path: Path) -> None:
    """Persist sweep trials as one Parquet table."""
    table = pa.Table.from_pylist([trial.to_row() for trial in trials], schema=ATTACK_SWEEP_SCHEMA)
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, path)


def run_attack_sweep(map_text: str, config: AttackSweepConfig | None = None) -> SweepResult:
    """Raise elf attack power one step at a time until a trial is flawless."""
    config = config or AttackSweepConfig()
    trials: list[SweepTrial] = []
    for power in range(config.start_power, config.max_power + 1):
        trial = run_trial(map_text, config.combat_config(power))
        trials.append(trial)
        logger.info(
            "Elf attack power %d: %d rounds, %d elf deaths%s",
            power,
            trial.completed_rounds,
            trial.elf_deaths,
            " (flawless)" if trial.flawless else "",
        )
        if trial.flawless:
            break

    result = SweepResult(trials=tuple(trials))
    if result.winning_trial is None:
        logger.warning(
            "No flawless elf victory for attack power %d..%d", config.start_power, config.max_power
        )
    if config.out_dir is not None:
        write_sweep_results(result.trials, attack_sweep_path(Path(config.out_dir)))
    return result
