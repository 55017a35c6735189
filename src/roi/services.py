"""Write services for ROI inputs: commission rates, comp plans, monthly inputs.

Interval writes are serialized per scope key: a transaction-scoped advisory
lock (PostgreSQL) is taken before the overlap check, the stored intervals are
re-read under ``select_for_update``, and a unique constraint on
``(scope, effective_start)`` backs both.
"""
from __future__ import annotations

import hashlib
import logging
from datetime import date
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, connection, transaction

from core.exceptions import OverlapError, ValidationError
from production.lob import CANONICAL_LOBS
from roi.intervals import resolve_active, validate_no_overlap
from roi.models import (
    MONTH_RE,
    CommissionRate,
    CompensationPlan,
    ExternalMonthlyResult,
    MonthlyManualInput,
)

logger = logging.getLogger("salesroi")

ZERO = Decimal("0")
ONE = Decimal("1")


# ----------------------------------------------------------------------
# Validation helpers
# ----------------------------------------------------------------------

def to_decimal(value, field: str, *, required: bool = False, minimum=ZERO):
    """Parse a non-negative amount; ``None``/``""`` allowed unless ``required``."""
    if value is None or value == "":
        if required:
            raise ValidationError(field, f"{field} is required.")
        return None
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number.")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(field, f"{field} must be a number.") from None
    if not amount.is_finite():
        raise ValidationError(field, f"{field} must be a number.")
    if minimum is not None and amount < minimum:
        raise ValidationError(field, f"{field} must be >= {minimum}.")
    return amount


def to_date(value, field: str, *, required: bool = True):
    if value is None or value == "":
        if required:
            raise ValidationError(field, f"{field} is required.")
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(field, f"{field} must be an ISO date (YYYY-MM-DD).") from None


def validate_month_key(value, field: str = "month") -> str:
    if not isinstance(value, str) or not MONTH_RE.match(value):
        raise ValidationError(field, "Month must be formatted YYYY-MM.")
    return value


def _get_person(organization, person_id):
    from roi.engine import RoiRollupEngine

    return RoiRollupEngine(organization.pk).get_person(person_id)


# ----------------------------------------------------------------------
# Scope locking
# ----------------------------------------------------------------------

def scope_lock_key(model, scope_key: tuple) -> int:
    """Stable 31-bit integer for ``pg_advisory_xact_lock`` derived from the scope."""
    raw = ":".join((model._meta.label_lower, *map(str, scope_key)))
    return int(hashlib.md5(raw.encode()).hexdigest(), 16) % (2**31)


def _lock_scope(model, scope_key: tuple) -> None:
    # On other DB engines (sqlite in local tests) the unique constraint is the only guard.
    if connection.vendor != "postgresql":
        return
    with connection.cursor() as cursor:
        cursor.execute("SELECT pg_advisory_xact_lock(%s)", [scope_lock_key(model, scope_key)])


def _save_interval(model, scope: dict, start: date, end, payload: dict):
    """Insert or replace one interval of ``model`` within ``scope``.

    Must run inside ``transaction.atomic``.
    """
    candidate = model(effective_start=start, effective_end=end, **scope)
    _lock_scope(model, candidate.scope_key())

    existing = list(model.objects.select_for_update().filter(**scope))
    replaced = validate_no_overlap(existing, start, end)

    if replaced is not None:
        replaced.effective_end = end
        for field, value in payload.items():
            setattr(replaced, field, value)
        replaced.save()
        return replaced, False

    try:
        with transaction.atomic():
            record = model.objects.create(effective_start=start, effective_end=end, **scope, **payload)
    except IntegrityError:
        raise OverlapError("Another period with the same start was saved concurrently.") from None
    return record, True


# ----------------------------------------------------------------------
# Commission rates
# ----------------------------------------------------------------------

@transaction.atomic
def save_commission_rate(*, organization, lob, rate, effective_start, effective_end=None):
    """Create a rate period for ``lob`` or update the one starting on ``effective_start``."""
    if lob not in CANONICAL_LOBS:
        raise ValidationError("lob", f"lob must be one of {', '.join(CANONICAL_LOBS)}.")
    rate = to_decimal(rate, "rate", required=True)
    if rate > ONE:
        raise ValidationError("rate", "Rate must be a decimal between 0 and 1 (e.g. 0.08 for 8%).")
    start = to_date(effective_start, "effective_start")
    end = to_date(effective_end, "effective_end", required=False)

    record, created = _save_interval(
        CommissionRate,
        {"organization": organization, "lob": lob},
        start,
        end,
        {"rate": rate},
    )
    logger.info(
        "Commission rate %s org=%s lob=%s rate=%s from=%s until=%s",
        "created" if created else "updated",
        organization.pk,
        lob,
        rate,
        start,
        end,
    )
    return record


def active_rates(organization, as_of: date) -> list[CommissionRate]:
    """The rate in effect on ``as_of`` for each LOB that has one."""
    candidates = CommissionRate.objects.filter(organization=organization, effective_start__lte=as_of)
    by_lob = {}
    for rate in candidates:
        by_lob.setdefault(rate.lob, []).append(rate)
    resolved = (resolve_active(rates, as_of) for rates in by_lob.values())
    return sorted((r for r in resolved if r is not None), key=lambda r: CANONICAL_LOBS.index(r.lob))


# ----------------------------------------------------------------------
# Compensation plans
# ----------------------------------------------------------------------

@transaction.atomic
def save_compensation_plan(*, organization, person_id, monthly_salary, effective_start, effective_end=None, label=""):
    """Create a salary period for a person or update the one starting on ``effective_start``."""
    person = _get_person(organization, person_id)
    salary = to_decimal(monthly_salary, "monthly_salary", required=True)
    start = to_date(effective_start, "effective_start")
    end = to_date(effective_end, "effective_end", required=False)

    record, created = _save_interval(
        CompensationPlan,
        {"organization": organization, "person": person},
        start,
        end,
        {"monthly_salary": salary, "label": (label or "").strip()[:120]},
    )
    logger.info(
        "Comp plan %s org=%s person=%s salary=%s from=%s until=%s",
        "created" if created else "updated",
        organization.pk,
        person.pk,
        salary,
        start,
        end,
    )
    return record


# ----------------------------------------------------------------------
# Monthly inputs
# ----------------------------------------------------------------------

@transaction.atomic
def upsert_monthly_input(
    *,
    organization,
    person_id,
    month,
    commission_paid,
    lead_spend=None,
    other_bonuses_manual=None,
    marketing_expenses=None,
    notes="",
):
    """Idempotent upsert keyed by (organization, person, month)."""
    person = _get_person(organization, person_id)
    month = validate_month_key(month)
    values = {
        "commission_paid": to_decimal(commission_paid, "commission_paid", required=True),
        "lead_spend": to_decimal(lead_spend, "lead_spend"),
        "other_bonuses_manual": to_decimal(other_bonuses_manual, "other_bonuses_manual"),
        "marketing_expenses": to_decimal(marketing_expenses, "marketing_expenses"),
        "notes": (notes or "").strip(),
    }
    record, created = MonthlyManualInput.objects.update_or_create(
        organization=organization,
        person=person,
        month=month,
        defaults=values,
    )
    logger.info(
        "Monthly input %s org=%s person=%s month=%s",
        "created" if created else "updated",
        organization.pk,
        person.pk,
        month,
    )
    return record


@transaction.atomic
def upsert_external_result(*, organization, person_id, month, total_earnings, source=""):
    """Record the compensation engine's figure for (person, month)."""
    person = _get_person(organization, person_id)
    month = validate_month_key(month)
    record, _created = ExternalMonthlyResult.objects.update_or_create(
        organization=organization,
        person=person,
        month=month,
        defaults={
            "total_earnings": to_decimal(total_earnings, "total_earnings", required=True),
            "source": (source or "")[:60],
        },
    )
    return record
