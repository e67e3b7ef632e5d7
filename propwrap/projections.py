"""
PropWrap Projections - Derived Read-Only Values
===============================================

A projection is a pure function of a wrapper's raw stored value. It is
evaluated on every access, so it always reflects the latest write.
"""

from typing import Any

from .policies import ClampRange


def truncating_div(numerator: int, denominator: int) -> int:
    """
    Integer division rounding toward zero.

    Python's ``//`` floors, which differs for negative operands:
    ``truncating_div(-7, 2) == -3`` while ``-7 // 2 == -4``.
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


class OverThresholdProjection:
    """
    Flags raw stored values above 60% of the range's upper bound.

    The threshold is ``upper * 6 / 10`` with truncating integer division,
    so ``[0, 150]`` gives 90 and ``[0, 105]`` gives 63 (not 63.0 or 63.6).
    The comparison uses the raw stored value, not the clamped read value.
    """

    def __init__(self, range: ClampRange) -> None:
        self._range = range
        self._threshold = truncating_div(range.upper * 6, 10)

    @property
    def range(self) -> ClampRange:
        return self._range

    @property
    def threshold(self) -> int:
        return self._threshold

    def __call__(self, stored: Any) -> bool:
        return stored > self._threshold

    def __repr__(self) -> str:
        return f"OverThresholdProjection(range={self._range}, threshold={self._threshold})"


def over_threshold(range: ClampRange) -> OverThresholdProjection:
    """Create the "raw value is dangerously high" projection for a range."""
    return OverThresholdProjection(range)
