from datetime import date
from decimal import Decimal

from benchmarks.pacing import elapsed_fraction, pace

JAN_1 = date(2024, 1, 1)
JAN_31 = date(2024, 1, 31)


def test_mid_month_pace():
    result = pace(40, 100, JAN_1, JAN_31, date(2024, 1, 16))

    assert result.elapsed_fraction == Decimal(15) / Decimal(31)
    assert round(result.pace_target, 2) == Decimal("48.39")
    assert round(result.pace_ratio, 2) == Decimal("0.83")
    assert result.delta == Decimal("-60")


def test_at_window_end_pace_is_actual_over_target():
    result = pace(40, 100, JAN_1, JAN_31, JAN_31)

    assert result.elapsed_fraction == 1
    assert result.pace_ratio == Decimal("0.4")


def test_after_window_end_elapsed_is_clamped():
    assert elapsed_fraction(JAN_1, JAN_31, date(2024, 3, 1)) == 1


def test_before_window_start_elapsed_is_zero():
    assert elapsed_fraction(JAN_1, JAN_31, date(2023, 12, 1)) == 0


def test_single_day_window_is_fully_elapsed():
    assert elapsed_fraction(JAN_1, JAN_1, JAN_1) == 1


def test_zero_target_with_production_has_no_ratio():
    result = pace(5, 0, JAN_1, JAN_31, date(2024, 1, 10))
    assert result.pace_ratio is None
    assert result.delta == 5


def test_zero_target_and_zero_actual_is_zero():
    assert pace(0, 0, JAN_1, JAN_31, date(2024, 1, 10)).pace_ratio == 0


def test_first_day_of_window_has_nothing_to_pace_against():
    result = pace(3, 100, JAN_1, JAN_31, JAN_1)
    assert result.pace_target == 0
    assert result.pace_ratio is None
