"""Configuration layer: constants and typed config dataclasses."""

from beverage_bandits.config.constants import (
    DEFAULT_ATTACK_POWER,
    DEFAULT_HIT_POINTS,
    FLUSH_THRESHOLD,
    MAX_MAP_DIMENSION,
    MAX_SWEEP_ATTACK_POWER,
)
from beverage_bandits.config.types import AttackSweepConfig, CombatConfig

__all__ = [
    "AttackSweepConfig",
    "CombatConfig",
    "DEFAULT_ATTACK_POWER",
    "DEFAULT_HIT_POINTS",
    "FLUSH_THRESHOLD",
    "MAX_MAP_DIMENSION",
    "MAX_SWEEP_ATTACK_POWER",
]
