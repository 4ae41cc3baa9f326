"""Tests for viz/render.py and viz/theme.py."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pyarrow.parquet as pq
import pytest

from beverage_bandits.domain.agents import Faction
from beverage_bandits.domain.grid import Grid
from beverage_bandits.io.loader import load_combat
from beverage_bandits.simulation.persistence import CombatTraceRecorder
from beverage_bandits.viz.render import (
    build_grid_array,
    hp_by_round,
    render_combat_frame,
    render_hp_timeseries,
    render_trace_animation,
)
from beverage_bandits.viz.theme import DARK_THEME, DEFAULT_THEME, REGISTERED_THEMES, get_theme

SMALL_MAP = """\
#######
#E..G.#
#.#...#
#G...E#
#######
"""


@pytest.fixture
def recorded_trace(tmp_path: Path) -> tuple[Path, Path]:
    map_path = tmp_path / "map.txt"
    map_path.write_text(SMALL_MAP, encoding="utf-8")
    trace_path = tmp_path / "logs" / "combat_trace.parquet"
    with CombatTraceRecorder(trace_path, run_id="small") as recorder:
        load_combat(SMALL_MAP, observers=[recorder]).run()
    return map_path, trace_path


class TestTheme:
    def test_get_theme_case_insensitive(self) -> None:
        assert get_theme("DARK") is DARK_THEME
        assert get_theme("default") is DEFAULT_THEME

    def test_unknown_theme_lists_available(self) -> None:
        with pytest.raises(ValueError, match="available: dark, default"):
            get_theme("neon")

    def test_every_theme_colors_both_factions(self) -> None:
        for theme in REGISTERED_THEMES.values():
            assert set(theme.faction_colors) == {f.value for f in Faction}


class TestBuildGridArray:
    def test_codes(self) -> None:
        grid = Grid.from_rows(["####", "#..#", "####"])
        array = build_grid_array(grid, [(Faction.ELF, 1, 1), (Faction.GOBLIN, 9, 9)])
        expected = np.array([[0, 0, 0, 0], [0, 2, 1, 0], [0, 0, 0, 0]])
        np.testing.assert_array_equal(array, expected)

    def test_goblin_code(self) -> None:
        grid = Grid.from_rows(["..."])
        array = build_grid_array(grid, [(Faction.GOBLIN, 2, 0)])
        assert array.tolist() == [[1, 1, 3]]


class TestHpByRound:
    def test_final_frame_replaces_last_round(self, recorded_trace: tuple[Path, Path]) -> None:
        _, trace_path = recorded_trace
        rows = pq.read_table(trace_path).to_pylist()
        series = hp_by_round(rows)
        rounds = [r for r, _ in series[Faction.ELF]]
        assert rounds == sorted(set(rounds))
        assert rounds[0] == 0
        assert series[Faction.ELF][0][1] == 400
        assert series[Faction.GOBLIN][0][1] == 400
        final_rows = [row for row in rows if row["final"]]
        last_elf = sum(r["hp"] for r in final_rows if r["alive"] and r["faction"] == "E")
        assert series[Faction.ELF][-1][1] == last_elf


class TestRenderOutputs:
    def test_render_combat_frame_writes_png(self, tmp_path: Path) -> None:
        engine = load_combat(SMALL_MAP)
        engine.step_round()
        output = tmp_path / "frames" / "round1.png"
        render_combat_frame(engine, output, theme=DARK_THEME)
        assert output.exists() and output.stat().st_size > 0

    def test_render_hp_timeseries_writes_png(
        self, recorded_trace: tuple[Path, Path], tmp_path: Path
    ) -> None:
        _, trace_path = recorded_trace
        output = tmp_path / "hp.png"
        render_hp_timeseries(trace_path, output, run_id="small")
        assert output.exists() and output.stat().st_size > 0

    def test_render_trace_animation_writes_gif(
        self, recorded_trace: tuple[Path, Path], tmp_path: Path
    ) -> None:
        map_path, trace_path = recorded_trace
        output = tmp_path / "combat.gif"
        render_trace_animation(trace_path, map_path, output, fps=10)
        assert output.exists() and output.stat().st_size > 0

    def test_unknown_run_id_raises(self, recorded_trace: tuple[Path, Path], tmp_path: Path) -> None:
        _, trace_path = recorded_trace
        with pytest.raises(ValueError, match="No trace rows"):
            render_hp_timeseries(trace_path, tmp_path / "hp.png", run_id="other")

    def test_animation_rejects_paths_outside_base_dir(
        self, recorded_trace: tuple[Path, Path], tmp_path: Path
    ) -> None:
        map_path, trace_path = recorded_trace
        with pytest.raises(ValueError, match="escapes"):
            render_trace_animation(
                trace_path, map_path, Path("../escape.gif"), base_dir=tmp_path
            )
