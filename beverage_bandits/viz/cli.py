from __future__ import annotations

import argparse
from pathlib import Path

from beverage_bandits.io.loader import read_map_file
from beverage_bandits.viz.render import (
    render_combat_frame,
    render_hp_timeseries,
    render_trace_animation,
)
from beverage_bandits.viz.theme import REGISTERED_THEMES, get_theme


def _build_frame_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("frame", help="Render one PNG of a combat after N rounds")
    p.set_defaults(func=_handle_frame)
    p.add_argument("--map", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--rounds", type=int, default=0, help="Rounds to play before rendering")


def _build_animate_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("animate", help="Animate a recorded combat trace")
    p.set_defaults(func=_handle_animate)
    p.add_argument("--trace", type=Path, required=True)
    p.add_argument("--map", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--fps", type=int, default=4)
    p.add_argument("--run-id", type=str, default=None)
    p.add_argument("--base-dir", type=Path, default=Path("."))


def _build_hp_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("hp", help="Plot faction hit points per round from a trace")
    p.set_defaults(func=_handle_hp)
    p.add_argument("--trace", type=Path, required=True)
    p.add_argument("--output", type=Path, required=True)
    p.add_argument("--run-id", type=str, default=None)


def _handle_frame(args: argparse.Namespace) -> None:
    if args.rounds < 0:
        raise ValueError("--rounds must be >= 0")
    engine = read_map_file(args.map)
    while not engine.finished and engine.completed_rounds < args.rounds:
        engine.step_round()
    render_combat_frame(engine, output_path=args.output, theme=args.theme)


def _handle_animate(args: argparse.Namespace) -> None:
    render_trace_animation(
        trace_path=args.trace,
        map_path=args.map,
        output_path=args.output,
        fps=args.fps,
        run_id=args.run_id,
        base_dir=args.base_dir,
        theme=args.theme,
    )


def _handle_hp(args: argparse.Namespace) -> None:
    render_hp_timeseries(
        trace_path=args.trace,
        output_path=args.output,
        run_id=args.run_id,
        theme=args.theme,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Visualization tools for combat maps and traces")
    parser.add_argument(
        "--theme",
        type=get_theme,
        default="default",
        help=f"Theme preset name ({', '.join(sorted(REGISTERED_THEMES))})",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_frame_parser(sub)
    _build_animate_parser(sub)
    _build_hp_parser(sub)
    args = parser.parse_args(argv)

    args.func(args)


if __name__ == "__main__":
    main()
