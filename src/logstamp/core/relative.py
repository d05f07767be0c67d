"""Relative-time rendering, e.g. ``1d2h ago`` or ``15m from now``."""

from enum import Enum

from logstamp.core.approximate import approximate
from logstamp.core.composite import CompositeTime, TimeUnit, seconds_to_composite

RIGHT_NOW = "right now"


class Direction(Enum):
    """Which side of "now" an instant falls on."""

    AGO = " ago"
    FROM_NOW = " from now"

    @classmethod
    def for_difference(cls, seconds_diff: int) -> "Direction":
        """Pick the direction for ``now - instant`` seconds."""
        return cls.AGO if seconds_diff >= 0 else cls.FROM_NOW


def format_relative(ct: CompositeTime, direction: Direction | str) -> str:
    """Render *ct* as value/symbol pairs followed by *direction*.

    Zero units are skipped and no separators are inserted, so
    1 year, 2 days and 4 hours renders as ``1y2d4h``. An all-zero value
    renders as the direction alone.
    """
    suffix = direction.value if isinstance(direction, Direction) else direction
    parts = [f"{ct[unit]}{unit.symbol}" for unit in TimeUnit if ct[unit] > 0]
    return "".join(parts) + suffix


def relative_text(seconds_diff: int, precision: int) -> str:
    """Describe a signed ``now - instant`` difference in seconds.

    Args:
        seconds_diff: Positive for instants in the past, negative for the future.
        precision: Number of significant units to keep.
    """
    if seconds_diff == 0:
        return RIGHT_NOW

    ct = seconds_to_composite(abs(seconds_diff))
    approximate(precision, ct)
    return format_relative(ct, Direction.for_difference(seconds_diff))
