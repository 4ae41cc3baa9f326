"""Text map loader producing the initial combat state.

Map alphabet: ``#`` wall, ``.`` floor, ``E`` elf, ``G`` goblin (agents stand
on floor). Trailing whitespace and trailing blank lines are ignored, and
short rows are padded with walls up to the longest row. Agent ids are
assigned in scan order (left to right, top to bottom) starting at 1.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from beverage_bandits.config.constants import (
    ELF_GLYPH,
    FLOOR_GLYPH,
    GOBLIN_GLYPH,
    WALL_GLYPH,
)
from beverage_bandits.config.types import CombatConfig
from beverage_bandits.domain.agents import Agent, Faction
from beverage_bandits.domain.errors import InputTooLarge, MalformedMap, MapError
from beverage_bandits.domain.grid import Cell, Grid
from beverage_bandits.simulation.engine import CombatEngine, CombatObserver

logger = logging.getLogger(__name__)


def _map_rows(text: str) -> list[str]:
    rows = [line.rstrip() for line in text.splitlines()]
    while rows and not rows[-1]:
        rows.pop()
    return rows


def parse_map(text: str, config: CombatConfig | None = None) -> tuple[Grid, list[Agent]]:
    """Parse *text* into a grid and the agents standing on it.

    Raises :class:`InputTooLarge` if either dimension exceeds
    ``config.max_map_dimension`` and :class:`MalformedMap` on an unknown
    character.
    """
    config = config or CombatConfig()
    rows = _map_rows(text)
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    if width > config.max_map_dimension or height > config.max_map_dimension:
        raise InputTooLarge(width, height, config.max_map_dimension)

    floor: set[Cell] = set()
    agents: list[Agent] = []
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == WALL_GLYPH:
                continue
            if char == FLOOR_GLYPH:
                floor.add((x, y))
            elif char in (ELF_GLYPH, GOBLIN_GLYPH):
                faction = Faction.from_glyph(char)
                floor.add((x, y))
                agents.append(
                    Agent(
                        agent_id=len(agents) + 1,
                        faction=faction,
                        x=x,
                        y=y,
                        attack_power=config.attack_power_for(faction),
                    )
                )
            else:
                raise MalformedMap(char, x, y)

    if not agents:
        raise MapError("map contains no agents")
    return Grid(width=width, height=height, floor=frozenset(floor)), agents


def load_combat(
    text: str,
    config: CombatConfig | None = None,
    observers: Iterable[CombatObserver] = (),
) -> CombatEngine:
    """Parse *text* and return a ready-to-run engine."""
    grid, agents = parse_map(text, config)
    elves = sum(1 for agent in agents if agent.faction is Faction.ELF)
    logger.info(
        "Loaded %dx%d map with %d elves and %d goblins",
        grid.width,
        grid.height,
        elves,
        len(agents) - elves,
    )
    return CombatEngine(grid, agents, observers=observers)


def read_map_file(
    path: Path,
    config: CombatConfig | None = None,
    observers: Iterable[CombatObserver] = (),
) -> CombatEngine:
    """Load a map file; OSError from reading propagates to the caller."""
    return load_combat(Path(path).read_text(encoding="utf-8"), config, observers)
