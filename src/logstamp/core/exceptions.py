"""Custom exceptions for logstamp."""


class LogstampError(Exception):
    """Base exception for logstamp."""


class PatternMismatch(LogstampError):
    """No timestamp template matched the line."""


class ParseFailure(LogstampError):
    """A template matched but the text did not parse with its format.

    Treated the same as :class:`PatternMismatch`: the line is passed
    through unmodified.
    """


class FormatError(LogstampError):
    """A user supplied strftime format is unusable."""


class FormatOverflow(FormatError):
    """Rendering the format exceeds the maximum output size."""


class ConfigError(LogstampError):
    """Error in configuration."""


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""


class ClockError(LogstampError):
    """The clock source cannot be read or is inconsistent."""


class ApproximationError(LogstampError):
    """Unit approximation failed to settle."""
