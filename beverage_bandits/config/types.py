"""Configuration dataclasses for combat runs and attack power sweeps.

All frozen dataclasses that parameterise a single combat or a sweep over
elf attack power live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from beverage_bandits.config.constants import (
    DEFAULT_ATTACK_POWER,
    MAX_MAP_DIMENSION,
    MAX_SWEEP_ATTACK_POWER,
)

if TYPE_CHECKING:
    from beverage_bandits.domain.agents import Faction

__all__ = [
    "AttackSweepConfig",
    "CombatConfig",
]


@dataclass(frozen=True)
class CombatConfig:
    """Rules knobs for one combat: per-faction attack power and loader limits."""

    elf_attack_power: int = DEFAULT_ATTACK_POWER
    goblin_attack_power: int = DEFAULT_ATTACK_POWER
    max_map_dimension: int = MAX_MAP_DIMENSION
    max_rounds: int | None = None
    """Stop with CombatStalled after this many completed rounds (None = unbounded)."""

    def __post_init__(self) -> None:
        if self.elf_attack_power < 1:
            raise ValueError("elf_attack_power must be >= 1")
        if self.goblin_attack_power < 1:
            raise ValueError("goblin_attack_power must be >= 1")
        if self.max_map_dimension < 1:
            raise ValueError("max_map_dimension must be >= 1")
        if self.max_rounds is not None and self.max_rounds < 1:
            raise ValueError("max_rounds must be >= 1")

    def attack_power_for(self, faction: Faction) -> int:
        """Return the attack power applied to every agent of *faction*."""
        from beverage_bandits.domain.agents import Faction

        if faction is Faction.ELF:
            return self.elf_attack_power
        return self.goblin_attack_power


@dataclass(frozen=True)
class AttackSweepConfig:
    """Settings for the search of the lowest flawless elf attack power."""

    start_power: int = DEFAULT_ATTACK_POWER + 1
    max_power: int = MAX_SWEEP_ATTACK_POWER
    goblin_attack_power: int = DEFAULT_ATTACK_POWER
    max_map_dimension: int = MAX_MAP_DIMENSION
    max_rounds: int | None = None
    out_dir: Path | None = None
    """Write attack_sweep.parquet under ``out_dir/logs`` when set."""

    def __post_init__(self) -> None:
        if self.start_power < 1:
            raise ValueError("start_power must be >= 1")
        if self.max_power < self.start_power:
            raise ValueError("max_power must be >= start_power")
        # Reuse CombatConfig validation for the shared fields
        self.combat_config(self.start_power)

    def combat_config(self, elf_attack_power: int) -> CombatConfig:
        """Build the CombatConfig for one trial of the sweep."""
        return CombatConfig(
            elf_attack_power=elf_attack_power,
            goblin_attack_power=self.goblin_attack_power,
            max_map_dimension=self.max_map_dimension,
            max_rounds=self.max_rounds,
        )
