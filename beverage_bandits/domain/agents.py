"""Combatants: factions, status labels, and the mutable agent record."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from beverage_bandits.config.constants import (
    DEFAULT_ATTACK_POWER,
    DEFAULT_HIT_POINTS,
    ELF_GLYPH,
    GOBLIN_GLYPH,
)
from beverage_bandits.domain.errors import ContractViolation
from beverage_bandits.domain.grid import Cell


class Faction(Enum):
    """The two mutually hostile groups; the value is the map glyph."""

    ELF = ELF_GLYPH
    GOBLIN = GOBLIN_GLYPH

    @property
    def opponent(self) -> Faction:
        return Faction.GOBLIN if self is Faction.ELF else Faction.ELF

    @property
    def label(self) -> str:
        return "Elf" if self is Faction.ELF else "Goblin"

    @property
    def plural(self) -> str:
        return "Elves" if self is Faction.ELF else "Goblins"

    @classmethod
    def from_glyph(cls, glyph: str) -> Faction:
        try:
            return cls(glyph)
        except ValueError as exc:
            valid = ", ".join(f.value for f in cls)
            raise ValueError(f"faction glyph must be one of {valid}") from exc


class AgentStatus(Enum):
    """Human-readable label of what an agent did most recently."""

    IDLE = ""
    MOVING = "Moving"
    NOT_MOVING = "Not Moving"
    ATTACKING = "Attacking"
    UNDER_ATTACK = "Under Attack"
    DEAD = "Dead"


@dataclass
class Agent:
    """A single combatant. ``x``/``y`` change only through movement."""

    agent_id: int
    faction: Faction
    x: int
    y: int
    hp: int = DEFAULT_HIT_POINTS
    attack_power: int = DEFAULT_ATTACK_POWER
    status: AgentStatus = AgentStatus.IDLE

    def __post_init__(self) -> None:
        if self.agent_id < 1:
            raise ValueError("agent_id must be >= 1")
        if self.attack_power < 1:
            raise ValueError("attack_power must be >= 1")

    @property
    def position(self) -> Cell:
        return (self.x, self.y)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def is_enemy_of(self, other: Agent) -> bool:
        return self.faction is not other.faction

    def move_to(self, cell: Cell) -> None:
        if not self.alive:
            raise ContractViolation(f"dead agent {self.agent_id} cannot move")
        self.x, self.y = cell

    def take_damage(self, amount: int) -> bool:
        """Subtract *amount* hit points; return True if this blow killed the agent."""
        if not self.alive:
            raise ContractViolation(f"agent {self.agent_id} is already dead")
        if amount < 0:
            raise ContractViolation("damage must be non-negative")
        self.hp -= amount
        if self.alive:
            self.status = AgentStatus.UNDER_ATTACK
            return False
        self.status = AgentStatus.DEAD
        return True
