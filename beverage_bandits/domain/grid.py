"""Fixed-size rectangular map of wall and floor cells.

Cells are ``(x, y)`` tuples. Every tie in the simulation is broken by
"reading order": top-to-bottom, then left-to-right, i.e. ``(y, x)``
lexicographic ascending.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

Cell: TypeAlias = tuple[int, int]
"""Grid coordinate ``(x, y)``; ``y`` grows downwards."""

# Expansion order north, west, east, south: adjacent cells in reading order.
NEIGHBOR_OFFSETS: tuple[Cell, ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))


def reading_order(cell: Cell) -> tuple[int, int]:
    """Sort key placing *cell* in reading order."""
    return (cell[1], cell[0])


def sorted_reading_order(cells: Iterable[Cell]) -> list[Cell]:
    """Return *cells* sorted in reading order."""
    return sorted(cells, key=reading_order)


def adjacent_cells(cell: Cell) -> list[Cell]:
    """Return the four orthogonal neighbors of *cell* in reading order."""
    x, y = cell
    return [(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]


def is_adjacent(a: Cell, b: Cell) -> bool:
    """True when *a* and *b* share an edge."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


@dataclass(frozen=True)
class Grid:
    """Immutable wall/floor map of ``width`` x ``height`` cells."""

    width: int
    height: int
    floor: frozenset[Cell]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("grid dimensions must be >= 0")
        for x, y in self.floor:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ValueError(
                    f"floor cell {(x, y)} lies outside a {self.width}x{self.height} grid"
                )

    @classmethod
    def from_rows(cls, rows: Iterable[str], wall: str = "#") -> Grid:
        """Build a grid where every character other than *wall* is floor."""
        materialized = list(rows)
        width = max((len(row) for row in materialized), default=0)
        floor = frozenset(
            (x, y)
            for y, row in enumerate(materialized)
            for x, char in enumerate(row)
            if char != wall
        )
        return cls(width=width, height=len(materialized), floor=floor)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def passable(self, cell: Cell) -> bool:
        """True for floor cells inside the bounds; out-of-bounds is never passable."""
        return cell in self.floor

    def neighbors(self, cell: Cell) -> list[Cell]:
        """Passable orthogonal neighbors of *cell* in reading order."""
        return [n for n in adjacent_cells(cell) if n in self.floor]

    def cells(self) -> Iterator[Cell]:
        """Yield every cell (wall or floor) in reading order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)
