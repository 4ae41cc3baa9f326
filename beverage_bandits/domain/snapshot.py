"""Typed read-only views of combat state for renderers and trace writers.

Observers receive ``AgentState`` tuples instead of the live ``Agent``
records, so nothing outside the engine can move or damage an agent.
"""

from __future__ import annotations

from dataclasses import dataclass

from beverage_bandits.domain.agents import Agent, AgentStatus, Faction


@dataclass(frozen=True)
class AgentState:
    """Immutable snapshot of a single agent at one point in time."""

    agent_id: int
    faction: Faction
    x: int
    y: int
    hp: int
    attack_power: int
    status: AgentStatus

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @classmethod
    def of(cls, agent: Agent) -> AgentState:
        return cls(
            agent_id=agent.agent_id,
            faction=agent.faction,
            x=agent.x,
            y=agent.y,
            hp=agent.hp,
            attack_power=agent.attack_power,
            status=agent.status,
        )


@dataclass(frozen=True)
class CombatSnapshot:
    """Whole-combat state: round counter plus every agent ordered by id."""

    completed_rounds: int
    finished: bool
    agents: tuple[AgentState, ...]

    def living(self, faction: Faction | None = None) -> tuple[AgentState, ...]:
        return tuple(
            a for a in self.agents if a.alive and (faction is None or a.faction is faction)
        )
