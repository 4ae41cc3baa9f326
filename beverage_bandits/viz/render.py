"""Matplotlib-based rendering functions for combat visualizations."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq
from matplotlib import animation
from matplotlib.colors import BoundaryNorm, ListedColormap
from matplotlib.image import AxesImage
from matplotlib.patches import Patch

from beverage_bandits.domain.agents import Faction
from beverage_bandits.domain.grid import Cell, Grid
from beverage_bandits.io.loader import parse_map
from beverage_bandits.io.paths import resolve_within_base as _resolve_within_base
from beverage_bandits.simulation.engine import CombatEngine
from beverage_bandits.viz.theme import DEFAULT_THEME, Theme

WALL_CODE = 0
FLOOR_CODE = 1
FACTION_CODES: dict[Faction, int] = {Faction.ELF: 2, Faction.GOBLIN: 3}

# (round, final) orders the initial frame, each completed round, then the end state.
FrameKey = tuple[int, bool]


# ---------------------------------------------------------------------------
# Cell-fill helpers
# ---------------------------------------------------------------------------


def build_grid_array(grid: Grid, agents: Iterable[tuple[Faction, int, int]]) -> np.ndarray:
    """Return (H, W) int array: 0 wall, 1 floor, 2 elf, 3 goblin.

    *agents* yields ``(faction, x, y)`` for living agents. Out-of-bounds
    positions are silently skipped.
    """
    array = np.full((grid.height, grid.width), WALL_CODE, dtype=int)
    for x, y in grid.floor:
        array[y, x] = FLOOR_CODE
    for faction, x, y in agents:
        if 0 <= y < grid.height and 0 <= x < grid.width:
            array[y, x] = FACTION_CODES[faction]
    return array


def _cell_cmap(theme: Theme = DEFAULT_THEME) -> tuple[ListedColormap, BoundaryNorm]:
    """Discrete 4-color colormap (wall, floor, elf, goblin)."""
    colors = [
        theme.wall_color,
        theme.floor_color,
        theme.faction_colors[Faction.ELF.value],
        theme.faction_colors[Faction.GOBLIN.value],
    ]
    cmap = ListedColormap(colors)
    norm = BoundaryNorm([-0.5, 0.5, 1.5, 2.5, 3.5], cmap.N)
    return cmap, norm


def _build_legend_handles(theme: Theme = DEFAULT_THEME) -> list[Patch]:
    handles = [
        Patch(facecolor=theme.faction_colors[f.value], edgecolor="gray", label=f.plural)
        for f in Faction
    ]
    handles.append(Patch(facecolor=theme.wall_color, edgecolor="gray", label="Wall"))
    return handles


def _draw_cell_grid(
    ax: plt.Axes,
    array: np.ndarray,
    theme: Theme = DEFAULT_THEME,
) -> AxesImage:
    """Shared renderer: imshow with subtle grid lines on *ax*."""
    cmap, norm = _cell_cmap(theme)
    img = ax.imshow(array, cmap=cmap, norm=norm, origin="upper", aspect="equal")
    h, w = array.shape
    for x in range(w + 1):
        ax.axvline(x - 0.5, color=theme.grid_line_color, linewidth=0.5)
    for y in range(h + 1):
        ax.axhline(y - 0.5, color=theme.grid_line_color, linewidth=0.5)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_facecolor(theme.background_color)
    return img


def _draw_path(ax: plt.Axes, path: Iterable[Cell], theme: Theme) -> None:
    cells = list(path)
    if cells:
        xs, ys = zip(*cells, strict=True)
        ax.plot(xs, ys, color=theme.path_color, linewidth=2.0, marker="o", markersize=3)


# ---------------------------------------------------------------------------
# render_combat_frame
# ---------------------------------------------------------------------------


def render_combat_frame(
    engine: CombatEngine,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    annotate_hp: bool = True,
) -> None:
    """Save a PNG of the engine's current map, agents and planned path."""
    grid = engine.grid
    living = engine.living_agents()
    array = build_grid_array(grid, ((a.faction, a.x, a.y) for a in living))

    fig, ax = plt.subplots(figsize=(max(4, grid.width * 0.4), max(4, grid.height * 0.4)))
    fig.patch.set_facecolor(theme.background_color)
    _draw_cell_grid(ax, array, theme)
    _draw_path(ax, engine.current_path, theme)
    if annotate_hp:
        for agent in living:
            ax.text(
                agent.x,
                agent.y,
                str(agent.hp),
                ha="center",
                va="center",
                fontsize=6,
                color=theme.text_color,
            )
    status = "ended" if engine.finished else f"round {engine.current_round}"
    ax.set_title(f"Combat ({status})", color=theme.text_color)
    ax.legend(handles=_build_legend_handles(theme), loc="upper left", bbox_to_anchor=(1.0, 1.0))

    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=200, facecolor=fig.get_facecolor())
    plt.close(fig)


# ---------------------------------------------------------------------------
# Trace helpers
# ---------------------------------------------------------------------------


def _read_trace_rows(trace_path: Path, run_id: str | None) -> list[dict[str, Any]]:
    filters = [("run_id", "=", run_id)] if run_id is not None else None
    rows = pq.read_table(trace_path, filters=filters).to_pylist()
    if not rows:
        suffix = f" for run_id={run_id}" if run_id is not None else ""
        raise ValueError(f"No trace rows found{suffix}")
    return rows


def _group_frames(rows: list[dict[str, Any]]) -> dict[FrameKey, list[dict[str, Any]]]:
    frames: dict[FrameKey, list[dict[str, Any]]] = {}
    for row in rows:
        frames.setdefault((int(row["round"]), bool(row["final"])), []).append(row)
    return dict(sorted(frames.items()))


def _living_from_rows(rows: Iterable[dict[str, Any]]) -> list[tuple[Faction, int, int]]:
    return [
        (Faction.from_glyph(str(row["faction"])), int(row["x"]), int(row["y"]))
        for row in rows
        if row["alive"]
    ]


def _frame_title(key: FrameKey) -> str:
    round_number, final = key
    if final:
        return f"Combat ends during round {round_number + 1}"
    return "Initially" if round_number == 0 else f"After round {round_number}"


# ---------------------------------------------------------------------------
# render_trace_animation
# ---------------------------------------------------------------------------


def render_trace_animation(
    trace_path: Path,
    map_path: Path,
    output_path: Path,
    fps: int = 4,
    run_id: str | None = None,
    base_dir: Path | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Animate a recorded combat trace over the map it was fought on.

    ``.gif`` outputs use Pillow; anything else goes through FFmpeg.
    """
    if fps < 1:
        raise ValueError("fps must be >= 1")
    if base_dir is None:
        trace_path = Path(trace_path).resolve()
        map_path = Path(map_path).resolve()
        output_path = Path(output_path).resolve()
    else:
        base_dir = Path(base_dir).resolve()
        trace_path = _resolve_within_base(Path(trace_path), base_dir)
        map_path = _resolve_within_base(Path(map_path), base_dir)
        output_path = _resolve_within_base(Path(output_path), base_dir)

    grid, _ = parse_map(map_path.read_text(encoding="utf-8"))
    frames = _group_frames(_read_trace_rows(trace_path, run_id))
    keys = list(frames)

    fig, ax = plt.subplots(figsize=(max(4, grid.width * 0.4), max(4, grid.height * 0.4)))
    fig.patch.set_facecolor(theme.background_color)
    img = _draw_cell_grid(ax, build_grid_array(grid, _living_from_rows(frames[keys[0]])), theme)
    ax.set_xlim(-0.5, grid.width - 0.5)
    ax.set_ylim(grid.height - 0.5, -0.5)
    ax.set_title(_frame_title(keys[0]), color=theme.text_color)
    fig.tight_layout()

    def update(frame_index: int) -> tuple[Any, ...]:
        key = keys[frame_index]
        img.set_data(build_grid_array(grid, _living_from_rows(frames[key])))
        ax.set_title(_frame_title(key), color=theme.text_color)
        return (img,)

    anim = animation.FuncAnimation(
        fig, update, frames=len(keys), interval=max(1, int(1000 / fps)), blit=False
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    writer: animation.PillowWriter | animation.FFMpegWriter
    if output_path.suffix.lower() == ".gif":
        writer = animation.PillowWriter(fps=fps)
    else:
        writer = animation.FFMpegWriter(fps=fps)
    anim.save(output_path, writer=writer)
    plt.close(fig)


# ---------------------------------------------------------------------------
# render_hp_timeseries
# ---------------------------------------------------------------------------


def hp_by_round(rows: list[dict[str, Any]]) -> dict[Faction, list[tuple[int, int]]]:
    """Total living hp per faction at each recorded round.

    The end-of-combat frame replaces the round it shares a number with, since
    it was captured later.
    """
    latest: dict[int, list[dict[str, Any]]] = {}
    for (round_number, _), frame_rows in _group_frames(rows).items():
        latest[round_number] = frame_rows
    series: dict[Faction, list[tuple[int, int]]] = {faction: [] for faction in Faction}
    for round_number, frame_rows in latest.items():
        for faction in Faction:
            total = sum(
                int(row["hp"])
                for row in frame_rows
                if row["alive"] and row["faction"] == faction.value
            )
            series[faction].append((round_number, total))
    return series


def render_hp_timeseries(
    trace_path: Path,
    output_path: Path,
    run_id: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Line plot of each faction's total hit points per round."""
    series = hp_by_round(_read_trace_rows(Path(trace_path), run_id))

    fig, ax = plt.subplots(figsize=(6, 4))
    for faction, points in series.items():
        rounds = [r for r, _ in points]
        totals = [hp for _, hp in points]
        ax.plot(
            rounds,
            totals,
            color=theme.faction_colors[faction.value],
            label=theme.faction_labels.get(faction.value, faction.plural),
            linewidth=1.8,
        )
    ax.set_xlabel("Round")
    ax.set_ylabel("Total HP")
    ax.set_title("Faction hit points")
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.tight_layout()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=300)
    plt.close(fig)
