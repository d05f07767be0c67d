"""logstamp: timestamp lines of standard input."""

try:
    from logstamp._version import __version__
except ImportError:
    __version__ = "0.0.0.dev0"

from logstamp.core.approximate import approximate
from logstamp.core.clock import Clock, Timestamp
from logstamp.core.composite import (
    CompositeTime,
    TimeUnit,
    composite_to_seconds,
    seconds_to_composite,
)
from logstamp.core.config import LogstampConfig, get_config, load_config, reload_config
from logstamp.core.exceptions import (
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
from logstamp.core.patterns import (
    DEFAULT_PATTERNS,
    MatchResult,
    PatternTable,
    TimestampPattern,
    match_timestamp,
)
from logstamp.core.relative import Direction, format_relative, relative_text
from logstamp.core.resolve import render_instant, resolve, rewrite_line
from logstamp.core.stamper import Stamper, StampOptions

__all__ = [
    # Version
    "__version__",
    # Durations
    "CompositeTime",
    "TimeUnit",
    "seconds_to_composite",
    "composite_to_seconds",
    "approximate",
    # Relative formatting
    "Direction",
    "format_relative",
    "relative_text",
    # Matching
    "TimestampPattern",
    "PatternTable",
    "MatchResult",
    "DEFAULT_PATTERNS",
    "match_timestamp",
    # Resolution
    "resolve",
    "render_instant",
    "rewrite_line",
    # Streaming
    "Clock",
    "Timestamp",
    "Stamper",
    "StampOptions",
    # Config
    "load_config",
    "get_config",
    "reload_config",
    "LogstampConfig",
    # Exceptions
    "LogstampError",
    "PatternMismatch",
    "ParseFailure",
    "FormatError",
    "FormatOverflow",
    "ConfigError",
    "ConfigNotFoundError",
    "ClockError",
    "ApproximationError",
]
