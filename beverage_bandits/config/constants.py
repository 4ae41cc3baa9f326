"""Centralized domain constants for combat simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

DEFAULT_HIT_POINTS = 200
"""Hit points every agent starts combat with."""

DEFAULT_ATTACK_POWER = 3
"""Attack power of an agent unless its faction is overridden."""

MAX_MAP_DIMENSION = 32
"""Default upper bound on input map width and height."""

MAX_SWEEP_ATTACK_POWER = 200
"""Highest elf attack power tried by the attack power sweep."""

FLUSH_THRESHOLD = 8_192
"""Flush trace rows to Parquet once this in-memory row count is reached."""

WALL_GLYPH = "#"
"""Map character for an impassable cell."""

FLOOR_GLYPH = "."
"""Map character for an empty passable cell."""

ELF_GLYPH = "E"
"""Map character for a floor cell holding an elf."""

GOBLIN_GLYPH = "G"
"""Map character for a floor cell holding a goblin."""
