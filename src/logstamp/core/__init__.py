"""Core timestamp matching, resolution and formatting for logstamp."""

from .composite import CompositeTime, TimeUnit
from .exceptions import (
    ApproximationError,
    ClockError,
    ConfigError,
    ConfigNotFoundError,
    FormatError,
    FormatOverflow,
    LogstampError,
    ParseFailure,
    PatternMismatch,
)
from .patterns import MatchResult, PatternTable, TimestampPattern

__all__ = [
    # Exceptions
    "ApproximationError",
    "ClockError",
    "ConfigError",
    "ConfigNotFoundError",
    "FormatError",
    "FormatOverflow",
    "LogstampError",
    "ParseFailure",
    "PatternMismatch",
    # Types
    "CompositeTime",
    "TimeUnit",
    "MatchResult",
    "PatternTable",
    "TimestampPattern",
]
