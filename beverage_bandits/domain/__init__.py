"""Domain layer: grid, agents, position index, and path search."""

from beverage_bandits.domain.agents import Agent, AgentStatus, Faction
from beverage_bandits.domain.errors import (
    CombatError,
    CombatStalled,
    ContractViolation,
    InputTooLarge,
    MalformedMap,
    MapError,
)
from beverage_bandits.domain.grid import (
    Cell,
    Grid,
    adjacent_cells,
    is_adjacent,
    reading_order,
    sorted_reading_order,
)
from beverage_bandits.domain.pathfinding import (
    BfsResult,
    MoveDecision,
    NoPath,
    NoTarget,
    Step,
    bfs,
    choose_step,
    in_range_cells,
)
from beverage_bandits.domain.position_index import PositionIndex
from beverage_bandits.domain.snapshot import AgentState, CombatSnapshot

__all__ = [
    "Agent",
    "AgentState",
    "AgentStatus",
    "BfsResult",
    "Cell",
    "CombatError",
    "CombatSnapshot",
    "CombatStalled",
    "ContractViolation",
    "Faction",
    "Grid",
    "InputTooLarge",
    "MalformedMap",
    "MapError",
    "MoveDecision",
    "NoPath",
    "NoTarget",
    "PositionIndex",
    "Step",
    "adjacent_cells",
    "bfs",
    "choose_step",
    "in_range_cells",
    "is_adjacent",
    "reading_order",
    "sorted_reading_order",
]
