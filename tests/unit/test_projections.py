"""Unit tests for projections and truncating division."""

import pytest

from propwrap import ClampRange, OverThresholdProjection, over_threshold, truncating_div


@pytest.mark.unit
@pytest.mark.parametrize(
    "numerator, denominator, expected",
    [(900, 10, 90), (7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 10, 0)],
)
def test_truncating_div_rounds_toward_zero(numerator, denominator, expected):
    assert truncating_div(numerator, denominator) == expected


@pytest.mark.unit
def test_over_threshold_thresholds():
    assert over_threshold(ClampRange(0, 100)).threshold == 60
    assert over_threshold(ClampRange(0, 150)).threshold == 90
    assert over_threshold(ClampRange(0, 105)).threshold == 63
    assert over_threshold(ClampRange(0, 7)).threshold == 4


@pytest.mark.unit
@pytest.mark.edge_case
def test_over_threshold_truncates_negative_bounds_toward_zero():
    # -15 * 6 / 10 = -9.0 exactly, -17 * 6 / 10 = -10.2 truncates to -10
    assert over_threshold(ClampRange(-20, -15)).threshold == -9
    assert over_threshold(ClampRange(-20, -17)).threshold == -10


@pytest.mark.unit
def test_over_threshold_is_strictly_greater():
    projection = over_threshold(ClampRange(0, 100))
    assert projection(60) is False
    assert projection(61) is True


@pytest.mark.unit
def test_over_threshold_evaluates_raw_values_outside_range():
    projection = over_threshold(ClampRange(0, 100))
    assert projection(1_000) is True
    assert projection(-5) is False


@pytest.mark.unit
def test_over_threshold_exposes_range():
    range_ = ClampRange(0, 150)
    projection = over_threshold(range_)
    assert isinstance(projection, OverThresholdProjection)
    assert projection.range is range_
