"""Visualization theme presets for combat renderers.

Themes are frozen dataclasses that group all styling constants together.
Renderers accept a ``Theme`` instance, and the CLI picks one by name via
``--theme``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    # Map cells
    wall_color: str = "#4E342E"
    floor_color: str = "#F0F0F0"
    grid_line_color: str = "#CCCCCC"

    # Agents, keyed by faction glyph
    faction_colors: dict[str, str] = field(
        default_factory=lambda: {"E": "#4CAF50", "G": "#E53935"}
    )
    faction_labels: dict[str, str] = field(
        default_factory=lambda: {"E": "Elves", "G": "Goblins"}
    )

    # Figure chrome
    background_color: str = "#FFFFFF"
    text_color: str = "#000000"
    path_color: str = "#FFC107"


DEFAULT_THEME = Theme()

DARK_THEME = Theme(
    wall_color="#1A1A1A",
    floor_color="#3A3A3A",
    grid_line_color="#333333",
    faction_colors={"E": "#81C784", "G": "#FF7043"},
    background_color="#1A1A1A",
    text_color="#FFFFFF",
    path_color="#FFEB3B",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
