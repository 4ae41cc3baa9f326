"""Tests for beverage_bandits.domain.agents and snapshot modules."""

from __future__ import annotations

import dataclasses

import pytest

from beverage_bandits.domain.agents import Agent, AgentStatus, Faction
from beverage_bandits.domain.errors import ContractViolation
from beverage_bandits.domain.snapshot import AgentState, CombatSnapshot


class TestFaction:
    def test_opponent(self) -> None:
        assert Faction.ELF.opponent is Faction.GOBLIN
        assert Faction.GOBLIN.opponent is Faction.ELF

    def test_from_glyph(self) -> None:
        assert Faction.from_glyph("E") is Faction.ELF
        assert Faction.from_glyph("G") is Faction.GOBLIN

    def test_from_glyph_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="faction glyph"):
            Faction.from_glyph("X")

    def test_plural_labels(self) -> None:
        assert Faction.ELF.plural == "Elves"
        assert Faction.GOBLIN.plural == "Goblins"


class TestAgent:
    def test_defaults(self) -> None:
        agent = Agent(agent_id=1, faction=Faction.ELF, x=1, y=2)
        assert agent.hp == 200
        assert agent.attack_power == 3
        assert agent.position == (1, 2)
        assert agent.status is AgentStatus.IDLE

    def test_take_damage_survives(self) -> None:
        agent = Agent(agent_id=1, faction=Faction.ELF, x=0, y=0, hp=10)
        assert agent.take_damage(3) is False
        assert agent.hp == 7
        assert agent.status is AgentStatus.UNDER_ATTACK

    def test_hp_not_clamped_on_death(self) -> None:
        agent = Agent(agent_id=1, faction=Faction.GOBLIN, x=0, y=0, hp=2)
        assert agent.take_damage(3) is True
        assert agent.hp == -1
        assert not agent.alive
        assert agent.status is AgentStatus.DEAD

    def test_dead_agent_cannot_be_damaged_or_moved(self) -> None:
        agent = Agent(agent_id=1, faction=Faction.GOBLIN, x=0, y=0, hp=1)
        agent.take_damage(3)
        with pytest.raises(ContractViolation):
            agent.take_damage(3)
        with pytest.raises(ContractViolation):
            agent.move_to((1, 0))

    def test_is_enemy_of(self) -> None:
        elf = Agent(agent_id=1, faction=Faction.ELF, x=0, y=0)
        goblin = Agent(agent_id=2, faction=Faction.GOBLIN, x=1, y=0)
        other_elf = Agent(agent_id=3, faction=Faction.ELF, x=2, y=0)
        assert elf.is_enemy_of(goblin)
        assert not elf.is_enemy_of(other_elf)

    def test_invalid_attack_power(self) -> None:
        with pytest.raises(ValueError, match="attack_power"):
            Agent(agent_id=1, faction=Faction.ELF, x=0, y=0, attack_power=0)


class TestSnapshot:
    def test_agent_state_is_frozen_copy(self) -> None:
        agent = Agent(agent_id=4, faction=Faction.ELF, x=3, y=1, hp=50)
        state = AgentState.of(agent)
        agent.take_damage(10)
        assert state.hp == 50
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.hp = 1  # type: ignore[misc]

    def test_living_filters_by_faction(self) -> None:
        states = (
            AgentState(1, Faction.ELF, 0, 0, 10, 3, AgentStatus.IDLE),
            AgentState(2, Faction.GOBLIN, 1, 0, -2, 3, AgentStatus.DEAD),
            AgentState(3, Faction.GOBLIN, 2, 0, 5, 3, AgentStatus.IDLE),
        )
        snapshot = CombatSnapshot(completed_rounds=2, finished=False, agents=states)
        assert [a.agent_id for a in snapshot.living()] == [1, 3]
        assert [a.agent_id for a in snapshot.living(Faction.GOBLIN)] == [3]
