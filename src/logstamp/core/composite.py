"""Composite-time representation and conversions.

A composite time breaks a duration into years, days, hours, minutes and
seconds, most significant first. Months are left out because their length
varies, which would break the fixed-modulus conversion.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum

from logstamp.core.types import UnitTuple

DAYS_PER_YEAR = 365
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60

SECONDS_PER_HOUR = MINUTES_PER_HOUR * SECONDS_PER_MINUTE
SECONDS_PER_DAY = HOURS_PER_DAY * SECONDS_PER_HOUR
SECONDS_PER_YEAR = DAYS_PER_YEAR * SECONDS_PER_DAY


class TimeUnit(IntEnum):
    """Units of a composite time, most significant first."""

    YEAR = 0
    DAY = 1
    HOUR = 2
    MINUTE = 3
    SECOND = 4

    @property
    def seconds(self) -> int:
        """Number of seconds in one of this unit."""
        return _UNIT_SECONDS[self]

    @property
    def max_value(self) -> int:
        """Exclusive upper bound for a normalised value of this unit."""
        return _UNIT_MAX[self]

    @property
    def symbol(self) -> str:
        """Single letter used when rendering, e.g. ``h`` for hours."""
        return self.name[0].lower()


_UNIT_SECONDS: dict[TimeUnit, int] = {
    TimeUnit.YEAR: SECONDS_PER_YEAR,
    TimeUnit.DAY: SECONDS_PER_DAY,
    TimeUnit.HOUR: SECONDS_PER_HOUR,
    TimeUnit.MINUTE: SECONDS_PER_MINUTE,
    TimeUnit.SECOND: 1,
}

# Years never overflow.
_UNIT_MAX: dict[TimeUnit, int] = {
    TimeUnit.YEAR: sys.maxsize,
    TimeUnit.DAY: DAYS_PER_YEAR,
    TimeUnit.HOUR: HOURS_PER_DAY,
    TimeUnit.MINUTE: MINUTES_PER_HOUR,
    TimeUnit.SECOND: SECONDS_PER_MINUTE,
}

UNIT_COUNT = len(TimeUnit)


@dataclass
class CompositeTime:
    """A duration broken into years, days, hours, minutes and seconds.

    Values can be read and written by :class:`TimeUnit` index::

        ct = CompositeTime(hours=1, minutes=59, seconds=30)
        ct[TimeUnit.HOUR] += 1
    """

    years: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    _FIELDS = ("years", "days", "hours", "minutes", "seconds")

    def __getitem__(self, unit: int) -> int:
        return getattr(self, self._FIELDS[unit])

    def __setitem__(self, unit: int, value: int) -> None:
        setattr(self, self._FIELDS[unit], value)

    def __iter__(self):
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return UNIT_COUNT

    @classmethod
    def from_tuple(cls, values: UnitTuple) -> CompositeTime:
        """Build from a ``(years, days, hours, minutes, seconds)`` tuple."""
        if len(values) != UNIT_COUNT:
            raise ValueError(f"Expected {UNIT_COUNT} values, got {len(values)}")
        return cls(*values)

    def as_tuple(self) -> UnitTuple:
        return (self.years, self.days, self.hours, self.minutes, self.seconds)

    def copy(self) -> CompositeTime:
        return CompositeTime(*self.as_tuple())

    def is_zero(self) -> bool:
        return not any(self.as_tuple())

    def is_normalised(self) -> bool:
        """True when every unit is within its raw bounds."""
        return all(
            0 <= self[unit] < unit.max_value for unit in TimeUnit
        )


def seconds_to_composite(total_seconds: int) -> CompositeTime:
    """Decompose *total_seconds* into a composite time.

    Truncating division, most significant unit first; no rounding.

    Raises:
        ValueError: If *total_seconds* is negative.
    """
    if total_seconds < 0:
        raise ValueError(f"Duration must be non-negative, got {total_seconds}")

    ct = CompositeTime()
    remainder = int(total_seconds)
    for unit in TimeUnit:
        ct[unit], remainder = divmod(remainder, unit.seconds)
    return ct


def composite_to_seconds(ct: CompositeTime) -> int:
    """Weighted sum of all units, the inverse of :func:`seconds_to_composite`."""
    return sum(ct[unit] * unit.seconds for unit in TimeUnit)
