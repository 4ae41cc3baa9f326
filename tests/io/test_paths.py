"""Tests for beverage_bandits.io.paths module."""

from __future__ import annotations

from pathlib import Path

import pytest

from beverage_bandits.io.paths import (
    attack_sweep_path,
    combat_trace_path,
    resolve_within_base,
)


def test_output_paths_live_under_logs() -> None:
    assert combat_trace_path(Path("out")) == Path("out/logs/combat_trace.parquet")
    assert attack_sweep_path(Path("out")) == Path("out/logs/attack_sweep.parquet")


def test_resolve_within_base_accepts_relative(tmp_path: Path) -> None:
    assert resolve_within_base(Path("a/b.txt"), tmp_path) == (tmp_path / "a/b.txt").resolve()


def test_resolve_within_base_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="escapes"):
        resolve_within_base(Path("../outside.txt"), tmp_path)
