"""Breadth-first shortest paths on the combat grid.

Occupied cells are obstacles; only the search source may be occupied. The
frontier is FIFO and each cell expands its neighbors north, west, east,
south, so the predecessor tree is a deterministic function of grid,
occupancy and source.

Movement is decided in two searches: one from the mover to rank the
in-range cells, and one back from the chosen cell to rank the mover's
first steps by remaining distance, then reading order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Container, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from beverage_bandits.domain.grid import Cell, Grid, adjacent_cells, reading_order


@dataclass(frozen=True)
class BfsResult:
    """Distances and first-reached predecessors rooted at ``source``."""

    source: Cell
    distances: dict[Cell, int]
    predecessors: dict[Cell, Cell]

    def reachable(self, cell: Cell) -> bool:
        return cell in self.distances

    def distance(self, cell: Cell) -> int | None:
        """Shortest distance from the source, or None if unreachable."""
        return self.distances.get(cell)

    def path_to(self, target: Cell) -> list[Cell] | None:
        """Cells after the source up to and including *target*, or None if unreachable."""
        if target not in self.distances:
            return None
        path: list[Cell] = []
        cell = target
        while cell != self.source:
            path.append(cell)
            cell = self.predecessors[cell]
        path.reverse()
        return path


def bfs(grid: Grid, occupied: Container[Cell], source: Cell) -> BfsResult:
    """Run an unweighted BFS from *source* over unoccupied floor cells."""
    distances: dict[Cell, int] = {source: 0}
    predecessors: dict[Cell, Cell] = {}
    frontier: deque[Cell] = deque([source])
    while frontier:
        current = frontier.popleft()
        next_distance = distances[current] + 1
        for neighbor in grid.neighbors(current):
            if neighbor in distances or neighbor in occupied:
                continue
            distances[neighbor] = next_distance
            predecessors[neighbor] = current
            frontier.append(neighbor)
    return BfsResult(source=source, distances=distances, predecessors=predecessors)


# ---------------------------------------------------------------------------
# Movement decision
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoTarget:
    """No free cell is in range of any target."""


@dataclass(frozen=True)
class NoPath:
    """Free in-range cells exist but none can be reached."""

    in_range: tuple[Cell, ...]


@dataclass(frozen=True)
class Step:
    """Move onto ``cell`` as the first step of ``path`` towards ``destination``."""

    cell: Cell
    destination: Cell
    distance: int
    path: tuple[Cell, ...]


MoveDecision: TypeAlias = NoTarget | NoPath | Step


def in_range_cells(
    grid: Grid, occupied: Container[Cell], targets: Iterable[Cell]
) -> list[Cell]:
    """Free floor cells orthogonally adjacent to any target, in reading order."""
    cells = {
        cell
        for target in targets
        for cell in adjacent_cells(target)
        if grid.passable(cell) and cell not in occupied
    }
    return sorted(cells, key=reading_order)


def choose_step(
    grid: Grid,
    occupied: Container[Cell],
    source: Cell,
    targets: Iterable[Cell],
) -> MoveDecision:
    """Pick the mover's next cell towards the nearest reachable in-range cell.

    Nearest is by BFS distance with reading order breaking ties, and the
    first step is the source neighbor closest to that cell, again tie-broken
    by reading order.
    """
    in_range = [cell for cell in in_range_cells(grid, occupied, targets) if cell != source]
    if not in_range:
        return NoTarget()

    outward = bfs(grid, occupied, source)
    reachable = [cell for cell in in_range if outward.reachable(cell)]
    if not reachable:
        return NoPath(in_range=tuple(in_range))
    destination = min(reachable, key=lambda c: (outward.distances[c], reading_order(c)))

    inward = bfs(grid, occupied, destination)
    first_steps = [
        cell for cell in grid.neighbors(source) if cell not in occupied and inward.reachable(cell)
    ]
    step = min(first_steps, key=lambda c: (inward.distances[c], reading_order(c)))

    path = [step]
    while path[-1] != destination:
        path.append(inward.predecessors[path[-1]])
    return Step(
        cell=step,
        destination=destination,
        distance=outward.distances[destination],
        path=tuple(path),
    )
