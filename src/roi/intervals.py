"""Effective-dated interval helpers.

Commission rates and compensation plans are both stored as
``[effective_start, effective_end]`` records (``effective_end`` ``None`` =
open-ended). These helpers work on any object with those two attributes,
model instances or plain objects alike, so both share one lookup rule and
one overlap rule.
"""
from __future__ import annotations

from datetime import date

from core.exceptions import OverlapError, ValidationError


def _end(value):
    return value if value is not None else date.max


def covers(record, as_of: date) -> bool:
    return record.effective_start <= as_of <= _end(record.effective_end)


def intervals_overlap(start_a: date, end_a, start_b: date, end_b) -> bool:
    """Closed intervals overlap unless one ends before the other starts."""
    return not (_end(end_a) < start_b or _end(end_b) < start_a)


def resolve_active(records, as_of: date):
    """Return the record in effect on ``as_of``, or ``None``.

    If several qualify (only possible with bad data), the latest
    ``effective_start`` wins.
    """
    best = None
    for record in records:
        if covers(record, as_of) and (best is None or record.effective_start > best.effective_start):
            best = record
    return best


def active_during(records, start: date, end: date) -> list:
    """Every record in effect at some point of ``[start, end]``."""
    return [
        record for record in records
        if intervals_overlap(record.effective_start, record.effective_end, start, end)
    ]


def validate_no_overlap(existing, start: date, end=None):
    """Check a candidate interval against the stored intervals of one scope.

    Returns the stored record sharing ``start`` (the write replaces it), or
    ``None`` for a brand new interval.

    Raises:
        ValidationError: ``end`` is before ``start``.
        OverlapError: the candidate intersects any other stored interval.
    """
    if start is None:
        raise ValidationError("effective_start", "Effective start is required.")
    if end is not None and end < start:
        raise ValidationError("effective_end", "Effective end must be on or after effective start.")

    replaced = None
    for record in existing:
        if record.effective_start == start:
            replaced = record
            continue
        if intervals_overlap(record.effective_start, record.effective_end, start, end):
            raise OverlapError(
                "Overlaps the period starting {} ({}).".format(
                    record.effective_start.isoformat(),
                    "open-ended" if record.effective_end is None else f"to {record.effective_end.isoformat()}",
                ),
                conflicting=record,
            )
    return replaced
