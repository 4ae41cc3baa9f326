"""Plain-text rendering of combat state for terminals and logs."""

from __future__ import annotations

import sys
import time
from typing import TextIO

from beverage_bandits.config.constants import FLOOR_GLYPH, WALL_GLYPH
from beverage_bandits.domain.grid import Cell, Grid
from beverage_bandits.domain.pathfinding import BfsResult
from beverage_bandits.simulation.engine import CombatEngine, CombatObserver, RoundResult

ANSI_CLEAR = "\x1b[2J\x1b[H"

# Arrow from a cell toward its BFS predecessor, keyed by (dx, dy).
_PREDECESSOR_ARROWS: dict[Cell, str] = {
    (0, -1): "^",
    (0, 1): "v",
    (-1, 0): "<",
    (1, 0): ">",
}


def render_map(engine: CombatEngine, annotate_hp: bool = True) -> str:
    """Return the map as text, optionally followed by ``G(200), E(197)`` per row."""
    grid = engine.grid
    lines: list[str] = []
    for y in range(grid.height):
        chars: list[str] = []
        annotations: list[str] = []
        for x in range(grid.width):
            agent = engine.agent_at((x, y))
            if agent is not None:
                chars.append(agent.faction.value)
                annotations.append(f"{agent.faction.value}({agent.hp})")
            elif grid.passable((x, y)):
                chars.append(FLOOR_GLYPH)
            else:
                chars.append(WALL_GLYPH)
        line = "".join(chars)
        if annotate_hp and annotations:
            line = f"{line}   {', '.join(annotations)}"
        lines.append(line)
    return "\n".join(lines)


def render_agent_table(engine: CombatEngine) -> str:
    """Tabulate every agent by id: faction, hp, position, and status label."""
    header = f"{'id':>3}  {'faction':<7}  {'hp':>4}  {'pos':<8}  status"
    lines = [header]
    for state in engine.snapshot().agents:
        status = state.status.value or "-"
        pos = f"{state.x},{state.y}"
        lines.append(
            f"{state.agent_id:>3}  {state.faction.label:<7}  {state.hp:>4}  {pos:<8}  {status}"
        )
    return "\n".join(lines)


def render_predecessors(grid: Grid, result: BfsResult) -> str:
    """Draw the BFS tree: each reached cell points at the cell it was reached from.

    The source is drawn as ``*``; floor the search never reached as ``.``.
    """
    lines: list[str] = []
    for y in range(grid.height):
        chars: list[str] = []
        for x in range(grid.width):
            cell = (x, y)
            if cell == result.source:
                chars.append("*")
            elif cell in result.predecessors:
                px, py = result.predecessors[cell]
                chars.append(_PREDECESSOR_ARROWS[(px - x, py - y)])
            elif grid.passable(cell):
                chars.append(FLOOR_GLYPH)
            else:
                chars.append(WALL_GLYPH)
        lines.append("".join(chars))
    return "\n".join(lines)


class TerminalRenderer(CombatObserver):
    """Observer that prints a frame after every completed round and at the end."""

    def __init__(
        self,
        stream: TextIO | None = None,
        clear: bool = False,
        delay: float = 0.0,
        show_table: bool = False,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.stream = stream if stream is not None else sys.stdout
        self.clear = clear
        self.delay = delay
        self.show_table = show_table
        self.frames_written = 0
        self._initial_written = False

    def write_frame(self, engine: CombatEngine, title: str) -> None:
        if self.clear:
            self.stream.write(ANSI_CLEAR)
        self.stream.write(f"{title}\n{render_map(engine)}\n")
        if self.show_table:
            self.stream.write(f"{render_agent_table(engine)}\n")
        self.stream.write("\n")
        self.stream.flush()
        self.frames_written += 1
        if self.delay:
            time.sleep(self.delay)

    def on_round_start(self, engine: CombatEngine) -> None:
        if not self._initial_written:
            self.write_frame(engine, "Initially:")
            self._initial_written = True

    def on_round_end(self, engine: CombatEngine, result: RoundResult) -> None:
        plural = "s" if result.round_number != 1 else ""
        self.write_frame(engine, f"After {result.round_number} round{plural}:")

    def on_combat_end(self, engine: CombatEngine) -> None:
        self.write_frame(engine, f"Combat ends during round {engine.current_round}:")
