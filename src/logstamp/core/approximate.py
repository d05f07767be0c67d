"""Unit approximation for composite times.

Collapses a fully detailed duration down to its most significant units so it
reads naturally, e.g. ``1h59m30s`` at precision 2 becomes ``2h``.
"""

from logstamp.core.composite import UNIT_COUNT, CompositeTime, TimeUnit
from logstamp.core.exceptions import ApproximationError

# Every pass either zeroes a tail of units or carries one unit upwards, so
# the loop settles well within this many passes.
MAX_PASSES = UNIT_COUNT * UNIT_COUNT


def approximate(precision: int, ct: CompositeTime) -> CompositeTime:
    """Normalise *ct* in place to at most *precision* non-zero units.

    The scan runs from years down to seconds, counting non-zero units.
    Years count towards the total but are never discarded or reset.

    * A unit beyond *precision* is excess. If it is at least half its
      maximum, the next more significant unit is rounded up. The unit and
      everything below it are then cleared.
    * A unit at or above its maximum (e.g. 60 minutes after a carry)
      overflows into the next more significant unit and is cleared. One
      overflow is corrected per pass.

    Scanning repeats until a pass changes nothing.

    Precision behaviour:

    * ``0`` clears every unit below years.
    * ``1`` keeps only the most significant non-zero unit.
    * ``>= 5`` keeps full detail; only overflows are corrected.

    Args:
        precision: Maximum number of non-zero units to keep.
        ct: Composite time to normalise; modified in place.

    Returns:
        The same *ct*, for convenience.

    Raises:
        ValueError: If *precision* or any unit value is negative.
        ApproximationError: If the scan fails to settle.
    """
    if precision < 0:
        raise ValueError(f"Precision must be non-negative, got {precision}")
    if any(value < 0 for value in ct):
        raise ValueError(f"Composite time has negative units: {ct.as_tuple()}")

    for _ in range(MAX_PASSES):
        if not _approximation_pass(precision, ct):
            return ct

    raise ApproximationError(
        f"Approximation did not settle after {MAX_PASSES} passes: {ct.as_tuple()}"
    )


def _approximation_pass(precision: int, ct: CompositeTime) -> bool:
    """Run one scan over *ct*. Returns True if anything changed."""
    overflowing: TimeUnit | None = None
    non_zero_count = 0

    for unit in TimeUnit:
        value = ct[unit]
        if value == 0:
            continue

        non_zero_count += 1

        if unit is TimeUnit.YEAR:
            continue

        if non_zero_count > precision:
            if value >= unit.max_value // 2:
                ct[unit - 1] += 1
            for lesser in TimeUnit:
                if lesser >= unit:
                    ct[lesser] = 0
            return True

        if value >= unit.max_value:
            overflowing = unit

    if overflowing is not None:
        ct[overflowing - 1] += 1
        ct[overflowing] = 0
        return True

    return False
