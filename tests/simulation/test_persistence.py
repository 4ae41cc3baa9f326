"""Tests for beverage_bandits.simulation.persistence (Parquet combat trace)."""

from __future__ import annotations

from pathlib import Path

import pyarrow.parquet as pq
import pytest

from beverage_bandits.io.loader import load_combat
from beverage_bandits.io.schemas import COMBAT_TRACE_SCHEMA, TRACE_SCHEMA_VERSION
from beverage_bandits.simulation.persistence import CombatTraceRecorder, flush_trace_columns

SCENARIO = """\
#######
#.G...#
#...EG#
#.#.#G#
#..G#E#
#.....#
#######
"""


def test_trace_records_initial_rounds_and_final(tmp_path: Path) -> None:
    trace_path = tmp_path / "logs" / "combat_trace.parquet"
    with CombatTraceRecorder(trace_path, run_id="scenario") as recorder:
        engine = load_combat(SCENARIO, observers=[recorder])
        engine.run()

    table = pq.read_table(trace_path)
    assert table.schema.equals(COMBAT_TRACE_SCHEMA)
    rows = table.to_pylist()
    # 6 agents x (initial + 47 completed rounds + final)
    assert len(rows) == 6 * 49
    assert recorder.rows_recorded == len(rows)
    assert {row["run_id"] for row in rows} == {"scenario"}

    initial = [row for row in rows if row["round"] == 0]
    assert len(initial) == 6
    assert all(row["hp"] == 200 for row in initial)

    final = [row for row in rows if row["final"]]
    assert {row["round"] for row in final} == {47}
    assert sum(row["hp"] for row in final if row["alive"]) == 590
    assert {row["faction"] for row in final if row["alive"]} == {"G"}


def test_small_flush_threshold_writes_same_rows(tmp_path: Path) -> None:
    big = tmp_path / "big.parquet"
    small = tmp_path / "small.parquet"
    for path, threshold in ((big, 10_000), (small, 3)):
        with CombatTraceRecorder(path, flush_threshold=threshold) as recorder:
            load_combat(SCENARIO, observers=[recorder]).run()
    assert pq.read_table(big).to_pylist() == pq.read_table(small).to_pylist()


def test_close_without_rows_writes_nothing(tmp_path: Path) -> None:
    trace_path = tmp_path / "empty.parquet"
    CombatTraceRecorder(trace_path).close()
    assert not trace_path.exists()


def test_flush_empty_columns_returns_writer_unchanged(tmp_path: Path) -> None:
    columns: dict[str, list[int | str | bool]] = {f.name: [] for f in COMBAT_TRACE_SCHEMA}
    assert flush_trace_columns(columns, tmp_path / "x.parquet", None) is None


def test_invalid_flush_threshold(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="flush_threshold"):
        CombatTraceRecorder(tmp_path / "x.parquet", flush_threshold=0)


def test_trace_file_carries_schema_version(tmp_path: Path) -> None:
    trace_path = tmp_path / "trace.parquet"
    with CombatTraceRecorder(trace_path) as recorder:
        load_combat(SCENARIO, observers=[recorder]).run()
    metadata = pq.read_schema(trace_path).metadata
    assert metadata[b"trace_schema_version"] == str(TRACE_SCHEMA_VERSION).encode()
