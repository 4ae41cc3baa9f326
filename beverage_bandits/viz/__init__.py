"""Visualization layer: themes, terminal and matplotlib renderers, CLI."""

from beverage_bandits.viz.cli import main
from beverage_bandits.viz.render import (
    build_grid_array,
    hp_by_round,
    render_combat_frame,
    render_hp_timeseries,
    render_trace_animation,
)
from beverage_bandits.viz.terminal import (
    TerminalRenderer,
    render_agent_table,
    render_map,
    render_predecessors,
)
from beverage_bandits.viz.theme import (
    DARK_THEME,
    DEFAULT_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DARK_THEME",
    "DEFAULT_THEME",
    "REGISTERED_THEMES",
    "TerminalRenderer",
    "Theme",
    "build_grid_array",
    "get_theme",
    "hp_by_round",
    "main",
    "render_agent_table",
    "render_combat_frame",
    "render_hp_timeseries",
    "render_map",
    "render_predecessors",
    "render_trace_animation",
]
