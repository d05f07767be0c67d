"""Timestamp detection templates and matching.

Each template pairs a detection regex with the strptime format used to parse
whatever it matched. Templates are tried in order and the first one to match
anywhere in the line wins, so more specific templates must come before more
general ones.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimestampPattern:
    """A detection regex paired with its strptime parse format."""

    regex: str
    description: str
    parse_format: str

    _compiled: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled(self) -> re.Pattern[str]:
        """The compiled regex (compiled once, on first use)."""
        if self._compiled is None:
            object.__setattr__(self, "_compiled", re.compile(self.regex))
        return self._compiled  # type: ignore[return-value]

    def search(self, line: str) -> tuple[int, int] | None:
        """Return the ``(start, end)`` span of the first match in *line*."""
        m = self.compiled.search(line)
        if m is None:
            return None
        return m.span()


@dataclass(frozen=True)
class MatchResult:
    """Location of a recognised timestamp within a line."""

    start: int
    end: int
    text: str
    pattern: TimestampPattern

    @property
    def parse_format(self) -> str:
        return self.pattern.parse_format


class PatternTable:
    """Immutable, order-significant collection of timestamp templates."""

    def __init__(self, patterns: list[TimestampPattern] | tuple[TimestampPattern, ...]) -> None:
        self._patterns: tuple[TimestampPattern, ...] = tuple(patterns)
        for pattern in self._patterns:
            # Compile up front so a broken regex fails at startup.
            pattern.compiled

    def __iter__(self) -> Iterator[TimestampPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __getitem__(self, index: int) -> TimestampPattern:
        return self._patterns[index]

    def match(self, line: str) -> MatchResult | None:
        """Find the first template that matches *line*."""
        for pattern in self._patterns:
            span = pattern.search(line)
            if span is None:
                continue
            start, end = span
            logger.debug(f"Matched {pattern.description!r} at [{start}, {end})")
            return MatchResult(start=start, end=end, text=line[start:end], pattern=pattern)
        return None


DEFAULT_PATTERNS = PatternTable([
    TimestampPattern(
        regex=r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{9}Z",
        description="Kubernetes pod log entry with timestamp",
        parse_format="%Y-%m-%dT%H:%M:%S",
    ),
    TimestampPattern(
        regex=r"\d{2}\d{2} \d{2}:\d{2}:\d{2}\.\d{6}",
        description="Kubernetes client-go log format with microseconds",
        parse_format="%m%d %H:%M:%S",
    ),
    TimestampPattern(
        regex=r"\d+\s+\w\w\w\s+\d\d+\s+\d\d:\d\d:\d\d\s+[+-]\d\d\d\d",
        description="16 Jun 94 07:29:35 with timezone",
        parse_format="%d %b %y %H:%M:%S %z",
    ),
    TimestampPattern(
        regex=r"\d\d[-\s/]\w\w\w/\d\d+\s+\d\d:\d\d:\d\d\s+[+-]\d\d\d\d",
        description="21 dec/93 17:05:30 +0000",
        parse_format="%d %b/%y %H:%M:%S %z",
    ),
    TimestampPattern(
        regex=r"\d\d[-\s/]\w\w\w\s+\d\d:\d\d:\d\d\s+[+-]\d\d\d\d",
        description="21 dec 17:05:30 +0000",
        parse_format="%d %b %H:%M:%S %z",
    ),
    TimestampPattern(
        regex=r"\w{3}\s+\d{1,2}\s+\d\d:\d\d:\d\d\s+[+-]\d\d\d\d",
        description="Jan 21 17:05:30 +0000 syslog with timezone",
        parse_format="%b %d %H:%M:%S %z",
    ),
    TimestampPattern(
        regex=r"\d\d[-\s/]\w\w\w/\d\d+\s+\d\d:\d\d",
        description="21 dec/93 17:05 without seconds and timezone",
        parse_format="%d %b/%y %H:%M",
    ),
    TimestampPattern(
        regex=r"\d\d[-\s/]\w\w\w\s+\d\d:\d\d",
        description="21 dec 17:05 without seconds and timezone",
        parse_format="%d %b %H:%M",
    ),
    TimestampPattern(
        regex=r"\d\d\d\d[-:]\d\d[-:]\d\dT\d\d:\d\d:\d\d",
        description="ISO-8601 format",
        parse_format="%Y-%m-%dT%H:%M:%S",
    ),
    TimestampPattern(
        regex=r"\w\w\w\s+\w\w\w\s+\d\d\s+\d\d:\d\d",
        description="Lastlog format",
        parse_format="%a %b %d %H:%M",
    ),
    TimestampPattern(
        regex=r"\w{3}\s+\d{1,2}\s+\d\d:\d\d:\d\d",
        description="Syslog format with day",
        parse_format="%b %d %H:%M:%S",
    ),
])


def match_timestamp(line: str, patterns: PatternTable = DEFAULT_PATTERNS) -> MatchResult | None:
    """Locate the first recognised timestamp in *line*.

    Returns:
        The match, or None when no template matches (the caller then
        passes the line through untouched).
    """
    return patterns.match(line)
