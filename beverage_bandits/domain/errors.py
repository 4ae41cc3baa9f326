"""Exception hierarchy for map loading and combat engine failures."""

from __future__ import annotations


class CombatError(Exception):
    """Base class for every error raised by this package."""


class MapError(CombatError, ValueError):
    """Input map could not be turned into an initial combat state."""


class InputTooLarge(MapError):
    """Map width or height exceeds the configured maximum dimension."""

    def __init__(self, width: int, height: int, max_dimension: int) -> None:
        super().__init__(
            f"map is {width}x{height}, exceeding max_map_dimension={max_dimension}"
        )
        self.width = width
        self.height = height
        self.max_dimension = max_dimension


class MalformedMap(MapError):
    """Map contains a character outside the map alphabet."""

    def __init__(self, char: str, x: int, y: int) -> None:
        super().__init__(f"unknown map character {char!r} at x={x}, y={y}")
        self.char = char
        self.x = x
        self.y = y


class ContractViolation(CombatError, RuntimeError):
    """Internal invariant breach: a programming error, never recovered from."""


class CombatStalled(CombatError):
    """Combat did not end within the configured round limit."""

    def __init__(self, completed_rounds: int) -> None:
        super().__init__(f"combat still running after {completed_rounds} completed rounds")
        self.completed_rounds = completed_rounds
