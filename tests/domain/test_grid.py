"""Tests for beverage_bandits.domain.grid module."""

from __future__ import annotations

import pytest

from beverage_bandits.domain.grid import (
    Grid,
    adjacent_cells,
    is_adjacent,
    reading_order,
    sorted_reading_order,
)


class TestReadingOrder:
    def test_rows_before_columns(self) -> None:
        assert reading_order((5, 1)) < reading_order((0, 2))

    def test_sorted_reading_order(self) -> None:
        cells = [(3, 2), (1, 2), (4, 0), (0, 1)]
        assert sorted_reading_order(cells) == [(4, 0), (0, 1), (1, 2), (3, 2)]

    def test_adjacent_cells_in_reading_order(self) -> None:
        assert adjacent_cells((2, 2)) == [(2, 1), (1, 2), (3, 2), (2, 3)]
        assert adjacent_cells((2, 2)) == sorted_reading_order(adjacent_cells((2, 2)))

    def test_is_adjacent(self) -> None:
        assert is_adjacent((1, 1), (1, 2))
        assert not is_adjacent((1, 1), (2, 2))
        assert not is_adjacent((1, 1), (1, 1))


class TestGrid:
    def test_from_rows(self) -> None:
        grid = Grid.from_rows(["###", "#.#", "###"])
        assert (grid.width, grid.height) == (3, 3)
        assert grid.floor == frozenset({(1, 1)})

    def test_short_rows_pad_with_wall(self) -> None:
        grid = Grid.from_rows(["#....", "#."])
        assert grid.width == 5
        assert grid.passable((1, 1))
        assert not grid.passable((3, 1))

    def test_out_of_bounds_never_passable(self) -> None:
        grid = Grid.from_rows(["..", ".."])
        assert not grid.passable((-1, 0))
        assert not grid.passable((2, 0))
        assert not grid.in_bounds((0, 2))

    def test_neighbors_skip_walls(self) -> None:
        grid = Grid.from_rows(["#.#", "...", "###"])
        assert grid.neighbors((1, 1)) == [(1, 0), (0, 1), (2, 1)]

    def test_cells_iterates_in_reading_order(self) -> None:
        grid = Grid.from_rows(["..", ".."])
        assert list(grid.cells()) == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_floor_outside_bounds_rejected(self) -> None:
        with pytest.raises(ValueError, match="outside"):
            Grid(width=2, height=2, floor=frozenset({(2, 0)}))
