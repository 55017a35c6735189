"""Pace and delta of an actual figure against a target over a date window."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True)
class PaceResult:
    elapsed_fraction: Decimal
    pace_target: Decimal
    pace_ratio: Decimal | None  # None: actual > 0 but nothing to pace against
    delta: Decimal


def elapsed_fraction(window_start: date, window_end: date, as_of: date) -> Decimal:
    """Share of the window elapsed on ``as_of``; the window includes its last day."""
    if as_of >= window_end or window_end <= window_start:
        return ONE
    total_days = (window_end - window_start).days + 1
    fraction = Decimal((as_of - window_start).days) / Decimal(total_days)
    return min(max(fraction, ZERO), ONE)


def pace(actual, target, window_start: date, window_end: date, as_of: date) -> PaceResult:
    actual = Decimal(actual)
    target = Decimal(target)
    elapsed = elapsed_fraction(window_start, window_end, as_of)
    pace_target = target * elapsed

    if pace_target > 0:
        ratio = actual / pace_target
    elif actual > 0:
        ratio = None
    else:
        ratio = ZERO

    return PaceResult(
        elapsed_fraction=elapsed,
        pace_target=pace_target,
        pace_ratio=ratio,
        delta=actual - target,
    )
