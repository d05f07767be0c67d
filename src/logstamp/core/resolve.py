"""Resolve a matched timestamp to an absolute instant and render it."""

from __future__ import annotations

import logging
from datetime import datetime

from logstamp.core.exceptions import ParseFailure
from logstamp.core.patterns import DEFAULT_PATTERNS, MatchResult, PatternTable
from logstamp.core.relative import relative_text
from logstamp.core.timefmt import strftime

logger = logging.getLogger(__name__)

_UNCONVERTED = "unconverted data remains: "
_YEAR_DIRECTIVES = ("%Y", "%y", "%G")


def has_year(parse_format: str) -> bool:
    """True when *parse_format* populates the year."""
    return any(directive in parse_format for directive in _YEAR_DIRECTIVES)


def _strptime_prefix(text: str, parse_format: str) -> datetime:
    """Parse the leading part of *text*, ignoring whatever follows.

    C ``strptime`` stops once the format is used up; the Python version
    rejects leftovers, so trim them (fractional seconds, a trailing ``Z``)
    and parse again.
    """
    try:
        return datetime.strptime(text, parse_format)
    except ValueError as e:
        message = str(e)
        if not message.startswith(_UNCONVERTED):
            raise
        leftover = message[len(_UNCONVERTED):]
        return datetime.strptime(text[: len(text) - len(leftover)], parse_format)


def _parse_in_year(text: str, parse_format: str, year: int) -> datetime:
    return _strptime_prefix(f"{year} {text}", f"%Y {parse_format}")


def _previous_year(moment: datetime) -> datetime:
    """*moment* one year earlier; Feb 29 becomes Mar 1 in a common year."""
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        return moment.replace(year=moment.year - 1, month=3, day=1)


def parse_timestamp(text: str, parse_format: str, year: int) -> datetime:
    """Parse *text* with *parse_format*, defaulting a missing year to *year*.

    A year-less date that does not exist in *year* (Feb 29 in a common
    year) is parsed in the year before instead.

    Raises:
        ParseFailure: If the text does not fit the format.
    """
    try:
        if has_year(parse_format):
            return _strptime_prefix(text, parse_format)
        try:
            return _parse_in_year(text, parse_format, year)
        except ValueError:
            return _parse_in_year(text, parse_format, year - 1)
    except ValueError as e:
        raise ParseFailure(f"Cannot parse {text!r} with {parse_format!r}: {e}") from e


def resolve(text: str, parse_format: str, now: datetime) -> datetime:
    """Resolve a matched timestamp to an aware :class:`datetime`.

    A timestamp without a year gets the year of *now*. Values without an
    explicit UTC offset take the timezone of *now*, leaving daylight saving
    to the zone rules. If the result lies after *now*, the year is assumed
    wrong (e.g. a December entry read in January) and is moved back once.

    Args:
        text: The matched timestamp text.
        parse_format: strptime format paired with the matching template.
        now: Current time; must be timezone aware.

    Raises:
        ParseFailure: If the text cannot be parsed.
        ValueError: If *now* is naive.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone aware")

    parsed = parse_timestamp(text, parse_format, now.year)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=now.tzinfo)

    if parsed > now:
        corrected = _previous_year(parsed)
        logger.debug(f"{text!r} lies in the future, assuming year {corrected.year}")
        parsed = corrected

    return parsed


def seconds_between(now: datetime, instant: datetime) -> int:
    """Whole seconds from *instant* to *now* (negative if *instant* is later)."""
    return int(now.timestamp()) - int(instant.timestamp())


def render_instant(
    instant: datetime,
    now: datetime,
    precision: int,
    user_format: str | None = None,
) -> str:
    """Render *instant* with *user_format*, or relative to *now* without one."""
    if user_format is not None:
        return strftime(instant, user_format)
    return relative_text(seconds_between(now, instant), precision)


def resolve_match(match: MatchResult, now: datetime) -> datetime:
    """Resolve the text of *match* using its paired parse format."""
    return resolve(match.text, match.parse_format, now)


def rewrite_line(
    line: str,
    now: datetime,
    precision: int,
    user_format: str | None = None,
    patterns: PatternTable = DEFAULT_PATTERNS,
) -> str:
    """Replace everything up to the end of the first timestamp in *line*.

    Lines without a recognisable timestamp come back unchanged.
    """
    match = patterns.match(line)
    if match is None:
        return line
    try:
        instant = resolve_match(match, now)
    except ParseFailure as e:
        logger.debug(f"Passing line through: {e}")
        return line

    return render_instant(instant, now, precision, user_format) + line[match.end:]
