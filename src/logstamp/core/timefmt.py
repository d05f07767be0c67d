"""User timestamp formats.

Formats are plain strftime strings with one extension borrowed from
moreutils ``ts``: ``%.S``, ``%.s`` and ``%.T`` render seconds followed by
six digits of microseconds.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo

from logstamp.core.exceptions import FormatError, FormatOverflow

DEFAULT_FORMAT = "%b %d %H:%M:%S"
DEFAULT_ELAPSED_FORMAT = "%H:%M:%S"

# Largest rendered timestamp accepted for a user format.
MAX_FORMAT_SIZE = 4096

NANOSECONDS_PER_MICROSECOND = 1000

_MICROSECOND_SPECIFIER = re.compile(r"%\.([SsT])")

# strftime("%s") goes through mktime in the process-local zone, so epoch
# seconds are substituted before formatting. "%%" is matched to stay literal.
_EPOCH_SPECIFIER = re.compile(r"%[%s]")


def count_microsecond_specifiers(fmt: str) -> int:
    """Number of ``%.S``, ``%.s`` and ``%.T`` specifiers in *fmt*."""
    return len(_MICROSECOND_SPECIFIER.findall(fmt))


def sanitise_format(fmt: str, expand: bool = True) -> tuple[str, int]:
    """Rewrite the microsecond specifiers into plain strftime.

    Args:
        fmt: User supplied format.
        expand: Render microseconds (``%.S`` -> ``%S.%f``). When False the
            specifiers collapse to their whole-second form, which is what
            relative mode uses since parsed timestamps carry no fraction.

    Returns:
        The rewritten format and how many specifiers were found.
    """
    replacement = r"%\1.%f" if expand else r"%\1"
    return _MICROSECOND_SPECIFIER.subn(replacement, fmt)


def strftime(moment: datetime, fmt: str) -> str:
    """Format an aware *moment*, with ``%s`` taken from its own epoch value."""
    epoch = str(int(moment.timestamp()))
    fmt = _EPOCH_SPECIFIER.sub(lambda m: epoch if m.group() == "%s" else "%%", fmt)
    return moment.strftime(fmt)


def validate_format(fmt: str) -> str:
    """Check that *fmt* renders, and within :data:`MAX_FORMAT_SIZE`.

    An empty rendering is allowed.

    Returns:
        The sample rendering.

    Raises:
        FormatOverflow: If the rendering is too large.
        FormatError: If strftime rejects the format.
    """
    sample = datetime.fromtimestamp(0, timezone.utc)
    try:
        rendered = strftime(sample, fmt)
    except ValueError as e:
        raise FormatError(f"Invalid time format {fmt!r}: {e}") from e

    if len(rendered) > MAX_FORMAT_SIZE:
        raise FormatOverflow(
            f"Time format renders {len(rendered)} characters, "
            f"more than the maximum of {MAX_FORMAT_SIZE}"
        )
    return rendered


def render_timestamp(fmt: str, seconds: int, nanoseconds: int, tz: tzinfo) -> str:
    """Render a clock reading with an already sanitised *fmt*."""
    moment = datetime.fromtimestamp(seconds, tz).replace(
        microsecond=nanoseconds // NANOSECONDS_PER_MICROSECOND
    )
    return strftime(moment, fmt)
