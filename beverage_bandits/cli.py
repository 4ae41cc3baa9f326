"""CLI entrypoint: fight one combat from a map file, or sweep elf attack power.

This module owns argument parsing, config-file resolution and exit codes.
Combat rules live in ``beverage_bandits.simulation``; the sweep lives in
``beverage_bandits.experiments``.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from beverage_bandits.config.constants import (
    DEFAULT_ATTACK_POWER,
    MAX_MAP_DIMENSION,
    MAX_SWEEP_ATTACK_POWER,
)
from beverage_bandits.config.types import AttackSweepConfig, CombatConfig
from beverage_bandits.domain.errors import CombatStalled, MapError
from beverage_bandits.experiments.attack_sweep import run_attack_sweep
from beverage_bandits.io.loader import read_map_file
from beverage_bandits.io.paths import combat_trace_path
from beverage_bandits.simulation.engine import CombatObserver
from beverage_bandits.simulation.outcome import format_outcome
from beverage_bandits.simulation.persistence import CombatTraceRecorder
from beverage_bandits.viz.terminal import TerminalRenderer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(message)s"

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _coerce_bool(raw: object, key: str) -> bool:
    """Accept real booleans and the usual on/off words found in JSON configs."""
    if isinstance(raw, bool):
        return raw
    word = raw.strip().lower() if isinstance(raw, str) else None
    if word in _TRUE_WORDS or word in _FALSE_WORDS:
        return word in _TRUE_WORDS
    raise ValueError(f"{key} must be true or false, got {raw!r}")


def _coerce_int(raw: object, key: str) -> int:
    """Accept ints, integral floats and numeric strings; booleans are rejected."""
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, (int, str)) and not isinstance(raw, bool):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer, got {raw!r}")


def _lookup(cli_val: object, key: str, file_cfg: dict[str, object]) -> object:
    """CLI value if given, else the config-file value; ``None`` when neither is set."""
    return cli_val if cli_val is not None else file_cfg.get(key)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    raw = _lookup(cli_val, key, file_cfg)
    return default if raw is None else _coerce_bool(raw, key)


def _get_optional_int(cli_val: int | None, key: str, file_cfg: dict[str, object]) -> int | None:
    raw = _lookup(cli_val, key, file_cfg)
    return None if raw is None else _coerce_int(raw, key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    value = _get_optional_int(cli_val, key, file_cfg)
    return default if value is None else value


def _get_float(
    cli_val: float | None,
    key: str,
    file_cfg: dict[str, object],
    default: float,
    minimum: float | None = None,
) -> float:
    """Resolve a float option; NaN and values below *minimum* are rejected."""
    raw = _lookup(cli_val, key, file_cfg)
    if raw is None:
        value = default
    elif isinstance(raw, (int, float, str)) and not isinstance(raw, bool):
        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a number, got {raw!r}") from exc
    else:
        raise ValueError(f"{key} must be a number, got {raw!r}")
    if minimum is not None and not value >= minimum:
        raise ValueError(f"{key} must be >= {minimum:g}")
    return value


def _get_optional_path(
    cli_val: Path | None, key: str, file_cfg: dict[str, object]
) -> Path | None:
    raw = _lookup(cli_val, key, file_cfg)
    if raw is None:
        return None
    if not isinstance(raw, (str, Path)):
        raise ValueError(f"{key} must be a path string")
    return Path(raw)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Simulate an elves-versus-goblins combat on a text map"
    )
    parser.add_argument("map_file", type=Path, help="Map text file (# . E G)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--elf-attack-power", type=int, default=None)
    parser.add_argument("--goblin-attack-power", type=int, default=None)
    parser.add_argument("--max-map-dimension", type=int, default=None)
    parser.add_argument(
        "--max-rounds",
        type=int,
        default=None,
        help="Give up after this many completed rounds (exit code 1)",
    )
    parser.add_argument(
        "--trace-out",
        type=Path,
        default=None,
        metavar="DIR",
        help="Write a per-round Parquet trace of every agent to DIR/logs/combat_trace.parquet",
    )
    parser.add_argument(
        "--render",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the map after every round",
    )
    parser.add_argument("--delay", type=float, default=None, help="Seconds between frames")
    parser.add_argument(
        "--sweep-elf-power",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Find the lowest elf attack power that wins without an elf death",
    )
    parser.add_argument("--sweep-max-power", type=int, default=None)
    parser.add_argument("--sweep-out-dir", type=Path, default=None)
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


def _run_sweep(map_path: Path, sweep_config: AttackSweepConfig) -> int:
    result = run_attack_sweep(map_path.read_text(encoding="utf-8"), sweep_config)
    winning = result.winning_trial
    summary: dict[str, object] = {
        "mode": "attack_sweep",
        "trials": len(result.trials),
        "elf_attack_power": winning.elf_attack_power if winning else None,
        "outcome": winning.outcome.to_dict() if winning and winning.outcome else None,
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0 if winning else 1


def _run_combat(
    map_path: Path,
    config: CombatConfig,
    trace_dir: Path | None,
    render: bool,
    delay: float,
) -> int:
    observers: list[CombatObserver] = []
    if render:
        observers.append(TerminalRenderer(delay=delay))
    recorder: CombatTraceRecorder | None = None
    if trace_dir is not None:
        recorder = CombatTraceRecorder(combat_trace_path(trace_dir))
        observers.append(recorder)
    try:
        engine = read_map_file(map_path, config, observers)
        outcome = engine.run(config.max_rounds)
    finally:
        if recorder is not None:
            recorder.close()
    print(format_outcome(outcome))
    return 0


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit code.

    Supports ``--config path/to/config.json``. CLI arguments override
    config-file values; config-file values override built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        elf_attack_power = _get_optional_int(args.elf_attack_power, "elf_attack_power", file_cfg)
        goblin_attack_power = _get_int(
            args.goblin_attack_power, "goblin_attack_power", file_cfg, DEFAULT_ATTACK_POWER
        )
        max_map_dimension = _get_int(
            args.max_map_dimension, "max_map_dimension", file_cfg, MAX_MAP_DIMENSION
        )
        max_rounds = _get_optional_int(args.max_rounds, "max_rounds", file_cfg)
        trace_dir = _get_optional_path(args.trace_out, "trace_out", file_cfg)
        render = _get_bool(args.render, "render", file_cfg, False)
        delay = _get_float(args.delay, "delay", file_cfg, 0.0, minimum=0.0)
        is_sweep = _get_bool(args.sweep_elf_power, "sweep_elf_power", file_cfg, False)
        sweep_max_power = _get_int(
            args.sweep_max_power, "sweep_max_power", file_cfg, MAX_SWEEP_ATTACK_POWER
        )
        sweep_out_dir = _get_optional_path(args.sweep_out_dir, "sweep_out_dir", file_cfg)

        if is_sweep:
            # An explicit elf attack power is where the sweep starts.
            sweep_config = AttackSweepConfig(
                start_power=(
                    DEFAULT_ATTACK_POWER + 1 if elf_attack_power is None else elf_attack_power
                ),
                max_power=sweep_max_power,
                goblin_attack_power=goblin_attack_power,
                max_map_dimension=max_map_dimension,
                max_rounds=max_rounds,
                out_dir=sweep_out_dir,
            )
        else:
            combat_config = CombatConfig(
                elf_attack_power=(
                    DEFAULT_ATTACK_POWER if elf_attack_power is None else elf_attack_power
                ),
                goblin_attack_power=goblin_attack_power,
                max_map_dimension=max_map_dimension,
                max_rounds=max_rounds,
            )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        if is_sweep:
            return _run_sweep(args.map_file, sweep_config)
        return _run_combat(args.map_file, combat_config, trace_dir, render, delay)
    except MapError as exc:
        logger.error("Invalid map %s: %s", args.map_file, exc)
    except CombatStalled as exc:
        logger.error("%s", exc)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.map_file, exc)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
