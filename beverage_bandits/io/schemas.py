"""Parquet schema definitions for combat artifacts.

Every Arrow schema used for persisting combat traces and attack power sweep
results is centralised here so that writers and renderers work against the
same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

TRACE_SCHEMA_VERSION = 1

# One row per agent per recorded round. Round 0 is the initial state;
# ``final`` marks the rows captured when combat ended.
COMBAT_TRACE_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("round", pa.int64()),
        ("final", pa.bool_()),
        ("agent_id", pa.int64()),
        ("faction", pa.string()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("hp", pa.int64()),
        ("alive", pa.bool_()),
    ],
    metadata={"trace_schema_version": str(TRACE_SCHEMA_VERSION)},
)

ATTACK_SWEEP_SCHEMA = pa.schema(
    [
        ("elf_attack_power", pa.int64()),
        ("completed_rounds", pa.int64()),
        ("elf_deaths", pa.int64()),
        ("flawless", pa.bool_()),
        ("winner", pa.string()),
        ("hp_sum", pa.int64()),
        ("outcome", pa.int64()),
    ]
)
"""One row per trial; winner/hp_sum/outcome are null for trials aborted on an elf death."""
