"""Per-line stamping and the streaming read loop."""

from __future__ import annotations

import logging
import signal
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import IO

from logstamp.core.clock import Clock
from logstamp.core.config import DEFAULT_PRECISION
from logstamp.core.patterns import DEFAULT_PATTERNS, PatternTable
from logstamp.core.resolve import rewrite_line
from logstamp.core.timefmt import (
    DEFAULT_ELAPSED_FORMAT,
    DEFAULT_FORMAT,
    count_microsecond_specifiers,
    render_timestamp,
    sanitise_format,
    validate_format,
)

logger = logging.getLogger(__name__)

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class _StopReading(Exception):
    """Raised from the signal handler to abandon a blocking read."""


@dataclass
class StampOptions:
    """Options controlling how lines are stamped."""

    relative: bool = False
    incremental: bool = False
    since_start: bool = False
    monotonic: bool = False
    precision: int = DEFAULT_PRECISION
    format: str | None = None
    timezone: tzinfo = timezone.utc
    patterns: PatternTable = field(default=DEFAULT_PATTERNS, repr=False)

    @property
    def user_format_specified(self) -> bool:
        return self.format is not None

    @property
    def effective_format(self) -> str:
        """The user format, or the default for the current mode."""
        if self.format is not None:
            return self.format
        if self.incremental or self.since_start:
            return DEFAULT_ELAPSED_FORMAT
        return DEFAULT_FORMAT

    @property
    def hires(self) -> bool:
        """Whether sub-second readings are needed."""
        return count_microsecond_specifiers(self.effective_format) > 0 or self.monotonic


class Stamper:
    """Stamps lines according to :class:`StampOptions`.

    The time format is sanitised and validated up front, so a bad format
    fails before any input is read.

    Raises:
        FormatError: If the time format cannot be rendered.
        ConfigError: If incremental and since-start modes are combined.
    """

    def __init__(self, options: StampOptions, clock: Clock | None = None) -> None:
        self.options = options
        self.time_format, self.n_microsecond_specifiers = sanitise_format(
            options.effective_format, expand=not options.relative
        )
        validate_format(self.time_format)
        self.clock = clock or Clock(
            monotonic=options.monotonic,
            hires=options.hires,
            incremental=options.incremental,
            since_start=options.since_start,
        )
        self._stop_signal: int | None = None
        self._reading = False

    def stamp_line(self, line: str) -> str:
        """Return *line* with its timestamp applied."""
        if self.options.relative:
            reading = self.clock.now()
            now = datetime.fromtimestamp(reading.seconds, self.options.timezone)
            user_format = self.time_format if self.options.user_format_specified else None
            return rewrite_line(
                line,
                now,
                self.options.precision,
                user_format=user_format,
                patterns=self.options.patterns,
            )

        reading = self.clock.tick()
        # Elapsed durations are shown as a time of day counted from midnight.
        tz = timezone.utc if self.clock.elapsed_mode else self.options.timezone
        stamp = render_timestamp(self.time_format, reading.seconds, reading.nanoseconds, tz)
        return f"{stamp} {line}"

    def request_stop(self, signum: int, frame: object = None) -> None:
        """Signal handler: finish the current line, then stop.

        A blocking read is abandoned, since the interpreter would otherwise
        retry it and wait for more input.
        """
        self._stop_signal = signum
        if self._reading:
            self._reading = False
            raise _StopReading(signum)

    @property
    def stopping(self) -> bool:
        return self._stop_signal is not None

    def run(self, instream: IO[str], outstream: IO[str]) -> int:
        """Stamp every line of *instream* onto *outstream*.

        Stops at end of input or after the current line once SIGINT or
        SIGTERM arrives. Output is flushed after every line and on exit.

        Returns:
            Number of lines written.
        """
        previous = {sig: signal.signal(sig, self.request_stop) for sig in _STOP_SIGNALS}
        written = 0
        logger.debug("Reading input")
        try:
            while not self.stopping:
                self._reading = True
                line = instream.readline()
                self._reading = False
                if not line:
                    break
                outstream.write(self.stamp_line(line))
                outstream.flush()
                written += 1
        except _StopReading:
            logger.debug("Read abandoned")
        finally:
            self._reading = False
            outstream.flush()
            for sig, handler in previous.items():
                signal.signal(sig, handler)

        if self.stopping:
            logger.debug(f"Stopped by signal {self._stop_signal} after {written} lines")
        else:
            logger.debug(f"End of input after {written} lines")
        return written
