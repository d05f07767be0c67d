"""Clock source for stamping lines.

Readings come from either the wall clock or the monotonic clock. Monotonic
readings are shifted onto the wall clock by an offset (the monodelta) taken
once, from a single paired sample, when the clock is created.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, NamedTuple

from logstamp.core.exceptions import ClockError, ConfigError

logger = logging.getLogger(__name__)

NANOSECONDS_PER_SECOND = 1_000_000_000


class Timestamp(NamedTuple):
    """A clock reading split into whole seconds and nanoseconds."""

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def from_ns(cls, ns: int) -> Timestamp:
        seconds, nanoseconds = divmod(ns, NANOSECONDS_PER_SECOND)
        return cls(seconds, nanoseconds)

    def __sub__(self, other: Timestamp) -> Timestamp:
        seconds = self.seconds - other.seconds
        nanoseconds = self.nanoseconds - other.nanoseconds
        if nanoseconds < 0:
            seconds -= 1
            nanoseconds += NANOSECONDS_PER_SECOND
        return Timestamp(seconds, nanoseconds)


class Clock:
    """Produces the timestamp shown for each line.

    Args:
        monotonic: Read the monotonic clock instead of the wall clock.
        hires: Keep sub-second precision; otherwise nanoseconds are zeroed.
        incremental: Report time since the previous reading.
        since_start: Report time since the clock was created.
        wall_source: Wall clock in nanoseconds (for tests).
        mono_source: Monotonic clock in nanoseconds (for tests).
    """

    def __init__(
        self,
        monotonic: bool = False,
        hires: bool = False,
        incremental: bool = False,
        since_start: bool = False,
        wall_source: Callable[[], int] = time.time_ns,
        mono_source: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        if incremental and since_start:
            raise ConfigError("Incremental and since-start modes cannot be combined")

        self.monotonic = monotonic
        self.hires = hires
        self.incremental = incremental
        self.since_start = since_start
        self._wall_source = wall_source
        self._mono_source = mono_source
        self.monodelta = 0

        wall = Timestamp.from_ns(self._wall_source())
        self._last = Timestamp(wall.seconds, wall.nanoseconds if hires else 0)

        if monotonic:
            mono = Timestamp.from_ns(self._mono_source())
            if wall.seconds < mono.seconds:
                raise ClockError("Real time is less than monotonic time")
            self.monodelta = wall.seconds - mono.seconds
            self._last = Timestamp(mono.seconds + self.monodelta, mono.nanoseconds)
            logger.debug(f"Monotonic clock offset is {self.monodelta}s")

    @property
    def elapsed_mode(self) -> bool:
        """True when readings are durations rather than instants."""
        return self.incremental or self.since_start

    def now(self) -> Timestamp:
        """Current absolute time, aligned to the wall clock."""
        if self.monotonic:
            reading = Timestamp.from_ns(self._mono_source())
            reading = Timestamp(reading.seconds + self.monodelta, reading.nanoseconds)
        else:
            reading = Timestamp.from_ns(self._wall_source())

        if not self.hires:
            reading = Timestamp(reading.seconds, 0)
        return reading

    def tick(self) -> Timestamp:
        """Reading to display for the next line.

        The absolute time normally; in incremental mode the time since the
        previous tick, and in since-start mode the time since creation.
        """
        reading = self.now()
        if not self.elapsed_mode:
            return reading

        delta = reading - self._last
        if self.incremental:
            self._last = reading
        return delta
