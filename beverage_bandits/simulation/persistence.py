"""Parquet export of per-round combat state."""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

import pyarrow as pa
import pyarrow.parquet as pq

from beverage_bandits.config.constants import FLUSH_THRESHOLD
from beverage_bandits.io.schemas import COMBAT_TRACE_SCHEMA
from beverage_bandits.simulation.engine import CombatEngine, CombatObserver, RoundResult

logger = logging.getLogger(__name__)


def _empty_trace_columns() -> dict[str, list[int | str | bool]]:
    return {field.name: [] for field in COMBAT_TRACE_SCHEMA}


def flush_trace_columns(
    trace_columns: dict[str, list[int | str | bool]],
    trace_path: Path,
    trace_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated trace rows to Parquet and clear in-memory buffers."""
    if not trace_columns["run_id"]:
        return trace_writer
    table = pa.Table.from_pydict(trace_columns, schema=COMBAT_TRACE_SCHEMA)
    if trace_writer is None:
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        trace_writer = pq.ParquetWriter(trace_path, COMBAT_TRACE_SCHEMA)
    trace_writer.write_table(table)
    for values in trace_columns.values():
        values.clear()
    return trace_writer


class CombatTraceRecorder(CombatObserver):
    """Observer that records every agent at round 0, after each round, and at the end.

    Use as a context manager, or call :meth:`close` to flush the last rows.
    """

    def __init__(
        self,
        trace_path: Path,
        run_id: str = "combat",
        flush_threshold: int = FLUSH_THRESHOLD,
    ) -> None:
        if flush_threshold < 1:
            raise ValueError("flush_threshold must be >= 1")
        self.trace_path = Path(trace_path)
        self.run_id = run_id
        self.flush_threshold = flush_threshold
        self.rows_recorded = 0
        self._columns = _empty_trace_columns()
        self._writer: pq.ParquetWriter | None = None
        self._initial_recorded = False

    def __enter__(self) -> CombatTraceRecorder:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def record(self, engine: CombatEngine, final: bool = False) -> None:
        """Append one row per agent (dead ones included) for the current round count."""
        for state in engine.snapshot().agents:
            self._columns["run_id"].append(self.run_id)
            self._columns["round"].append(engine.completed_rounds)
            self._columns["final"].append(final)
            self._columns["agent_id"].append(state.agent_id)
            self._columns["faction"].append(state.faction.value)
            self._columns["x"].append(state.x)
            self._columns["y"].append(state.y)
            self._columns["hp"].append(state.hp)
            self._columns["alive"].append(state.alive)
            self.rows_recorded += 1
        if len(self._columns["run_id"]) >= self.flush_threshold:
            self._writer = flush_trace_columns(self._columns, self.trace_path, self._writer)

    def on_round_start(self, engine: CombatEngine) -> None:
        if not self._initial_recorded:
            self.record(engine)
            self._initial_recorded = True

    def on_round_end(self, engine: CombatEngine, result: RoundResult) -> None:
        self.record(engine)

    def on_combat_end(self, engine: CombatEngine) -> None:
        self.record(engine, final=True)

    def close(self) -> None:
        self._writer = flush_trace_columns(self._columns, self.trace_path, self._writer)
        if self._writer is not None:
            self._writer.close()
            self._writer = None
            logger.info("Wrote %d trace rows to %s", self.rows_recorded, self.trace_path)
