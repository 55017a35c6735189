from datetime import date
from types import SimpleNamespace

import pytest

from core.exceptions import OverlapError, ValidationError
from roi.intervals import active_during, intervals_overlap, resolve_active, validate_no_overlap


def _interval(start, end=None, **payload):
    return SimpleNamespace(
        effective_start=date.fromisoformat(start),
        effective_end=date.fromisoformat(end) if end else None,
        **payload,
    )


def test_resolve_active_picks_record_covering_date():
    old = _interval("2023-01-01", "2023-12-31", rate=0.05)
    current = _interval("2024-01-01", rate=0.08)

    assert resolve_active([old, current], date(2023, 6, 1)) is old
    assert resolve_active([old, current], date(2024, 3, 1)) is current


def test_resolve_active_returns_none_before_first_start():
    assert resolve_active([_interval("2024-01-01")], date(2023, 12, 31)) is None
    assert resolve_active([], date(2024, 1, 1)) is None


def test_resolve_active_end_date_is_inclusive():
    record = _interval("2024-01-01", "2024-01-31")
    assert resolve_active([record], date(2024, 1, 31)) is record
    assert resolve_active([record], date(2024, 2, 1)) is None


def test_resolve_active_prefers_latest_start_when_several_match():
    early = _interval("2024-01-01")
    late = _interval("2024-02-01")
    assert resolve_active([late, early], date(2024, 3, 1)) is late


def test_intervals_overlap_treats_open_end_as_infinite():
    assert intervals_overlap(date(2024, 1, 1), None, date(2030, 1, 1), None)
    assert not intervals_overlap(date(2024, 1, 1), date(2024, 1, 31), date(2024, 2, 1), None)
    assert intervals_overlap(date(2024, 1, 1), date(2024, 2, 1), date(2024, 2, 1), None)


def test_active_during_returns_every_intersecting_record():
    base = _interval("2024-01-01", monthly_salary=3000)
    supplement = _interval("2024-01-15", "2024-03-31", monthly_salary=500)
    finished = _interval("2023-01-01", "2023-12-31", monthly_salary=2000)

    active = active_during([base, supplement, finished], date(2024, 1, 1), date(2024, 1, 31))

    assert active == [base, supplement]


class TestValidateNoOverlap:
    def test_accepts_adjacent_interval(self):
        existing = [_interval("2024-01-01", "2024-01-31")]
        assert validate_no_overlap(existing, date(2024, 2, 1), None) is None

    def test_rejects_overlap_with_open_ended_record(self):
        existing = [_interval("2024-01-01")]
        with pytest.raises(OverlapError) as excinfo:
            validate_no_overlap(existing, date(2024, 6, 1), None)
        assert excinfo.value.field == "effective_start"
        assert excinfo.value.conflicting is existing[0]

    def test_same_start_is_a_replace(self):
        existing = [_interval("2024-01-01"), _interval("2023-01-01", "2023-12-31")]
        assert validate_no_overlap(existing, date(2024, 1, 1), None) is existing[0]

    def test_end_before_start_is_a_validation_error(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_no_overlap([], date(2024, 2, 1), date(2024, 1, 1))
        assert excinfo.value.field == "effective_end"

    def test_missing_start_is_a_validation_error(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_no_overlap([], None)
        assert excinfo.value.field == "effective_start"
