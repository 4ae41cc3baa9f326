"""Deterministic grid combat between elves and goblins.

Load a text map with :func:`load_combat`, play it out with
:meth:`CombatEngine.run`, and score it with :func:`format_outcome`.
"""

from beverage_bandits.config.types import AttackSweepConfig, CombatConfig
from beverage_bandits.domain.agents import Agent, Faction
from beverage_bandits.domain.errors import (
    CombatError,
    CombatStalled,
    ContractViolation,
    InputTooLarge,
    MalformedMap,
    MapError,
)
from beverage_bandits.io.loader import load_combat, parse_map, read_map_file
from beverage_bandits.simulation.engine import CombatEngine, CombatObserver
from beverage_bandits.simulation.outcome import Outcome, compute_outcome, format_outcome

__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AttackSweepConfig",
    "CombatConfig",
    "CombatEngine",
    "CombatError",
    "CombatObserver",
    "CombatStalled",
    "ContractViolation",
    "Faction",
    "InputTooLarge",
    "MalformedMap",
    "MapError",
    "Outcome",
    "compute_outcome",
    "format_outcome",
    "load_combat",
    "parse_map",
    "read_map_file",
]
