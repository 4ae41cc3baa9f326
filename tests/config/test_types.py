"""Tests for beverage_bandits.config.types module."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from beverage_bandits.config.types import AttackSweepConfig, CombatConfig
from beverage_bandits.domain.agents import Faction


class TestCombatConfig:
    def test_defaults(self) -> None:
        config = CombatConfig()
        assert config.elf_attack_power == 3
        assert config.goblin_attack_power == 3
        assert config.max_map_dimension == 32
        assert config.max_rounds is None

    def test_attack_power_for(self) -> None:
        config = CombatConfig(elf_attack_power=10, goblin_attack_power=4)
        assert config.attack_power_for(Faction.ELF) == 10
        assert config.attack_power_for(Faction.GOBLIN) == 4

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"elf_attack_power": 0},
            {"goblin_attack_power": -1},
            {"max_map_dimension": 0},
            {"max_rounds": 0},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            CombatConfig(**kwargs)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            CombatConfig().elf_attack_power = 5  # type: ignore[misc]


class TestAttackSweepConfig:
    def test_defaults_start_above_default_power(self) -> None:
        config = AttackSweepConfig()
        assert config.start_power == 4
        assert config.max_power == 200
        assert config.out_dir is None

    def test_combat_config_carries_shared_fields(self) -> None:
        config = AttackSweepConfig(goblin_attack_power=5, max_rounds=100, out_dir=Path("x"))
        combat = config.combat_config(9)
        assert combat == CombatConfig(
            elf_attack_power=9, goblin_attack_power=5, max_rounds=100
        )

    def test_max_below_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_power"):
            AttackSweepConfig(start_power=10, max_power=9)

    def test_shared_field_validation(self) -> None:
        with pytest.raises(ValueError, match="goblin_attack_power"):
            AttackSweepConfig(goblin_attack_power=0)
