"""Reverse map from occupied cell to the living agent standing on it.

The index stores agent ids, never agent objects, so it holds no references
back into the agent registry. Both directions are updated together by every
mutation; a mutation that would break the one-agent-per-cell invariant
raises :class:`ContractViolation` and leaves the index untouched.
"""

from __future__ import annotations

from collections.abc import Iterator

from beverage_bandits.domain.errors import ContractViolation
from beverage_bandits.domain.grid import Cell, sorted_reading_order


class PositionIndex:
    """Bidirectional ``cell <-> agent_id`` map of living agents."""

    def __init__(self) -> None:
        self._by_cell: dict[Cell, int] = {}
        self._by_id: dict[int, Cell] = {}

    def __len__(self) -> int:
        return len(self._by_cell)

    def __contains__(self, cell: object) -> bool:
        return cell in self._by_cell

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._by_cell)

    def occupant(self, cell: Cell) -> int | None:
        return self._by_cell.get(cell)

    def occupied(self, cell: Cell) -> bool:
        return cell in self._by_cell

    def position_of(self, agent_id: int) -> Cell | None:
        return self._by_id.get(agent_id)

    def place(self, agent_id: int, cell: Cell) -> None:
        if agent_id in self._by_id:
            raise ContractViolation(f"agent {agent_id} is already at {self._by_id[agent_id]}")
        if cell in self._by_cell:
            raise ContractViolation(f"cell {cell} is already occupied by {self._by_cell[cell]}")
        self._by_cell[cell] = agent_id
        self._by_id[agent_id] = cell

    def remove(self, agent_id: int) -> Cell:
        """Drop *agent_id* from the index and return the cell it vacated."""
        try:
            cell = self._by_id.pop(agent_id)
        except KeyError:
            raise ContractViolation(f"agent {agent_id} is not in the position index") from None
        del self._by_cell[cell]
        return cell

    def move(self, agent_id: int, cell: Cell) -> None:
        if cell in self._by_cell:
            raise ContractViolation(f"cell {cell} is already occupied by {self._by_cell[cell]}")
        self.remove(agent_id)
        self.place(agent_id, cell)

    def cells(self) -> list[Cell]:
        """Occupied cells in reading order."""
        return sorted_reading_order(self._by_cell)

    def items(self) -> list[tuple[Cell, int]]:
        """``(cell, agent_id)`` pairs in reading order."""
        return [(cell, self._by_cell[cell]) for cell in self.cells()]

    def as_dict(self) -> dict[Cell, int]:
        """Copy of the ``cell -> agent_id`` direction."""
        return dict(self._by_cell)
