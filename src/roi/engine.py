"""Monthly ROI rollup per salesperson.

For each calendar month the engine merges:
- sale events (apps, premium, and revenue = premium x commission rate),
- salary from every compensation plan active during the month (summed),
- commission paid (external compensation result, else manual input),
- manual costs (lead spend, other bonuses, marketing),
into one ``MonthlyResultRow``.

Facts are fetched once for the whole window; each month is then computed
from memory with no dependency on the other months.
"""
from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from core.exceptions import NotFoundError, ValidationError
from production.lob import CANONICAL_LOBS, normalize_lob

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class MonthWindow:
    key: str  # "YYYY-MM"
    start: date
    end: date

    @classmethod
    def for_month(cls, year: int, month: int) -> "MonthWindow":
        last_day = calendar.monthrange(year, month)[1]
        return cls(f"{year}-{month:02d}", date(year, month, 1), date(year, month, last_day))


@dataclass
class MonthlyResultRow:
    month: str
    apps: int = 0
    premium: Decimal = ZERO
    revenue: Decimal = ZERO
    salary: Decimal = ZERO
    commissions_paid: Decimal = ZERO
    commission_paid_from_external: bool = False
    lead_spend: Decimal = ZERO
    other_bonuses_auto: Decimal = ZERO
    other_bonuses_manual: Decimal = ZERO
    marketing_expenses: Decimal = ZERO
    net: Decimal = ZERO
    roi_percent: Decimal = ZERO

    @property
    def costs(self) -> Decimal:
        return (
            self.salary
            + self.commissions_paid
            + self.lead_spend
            + self.other_bonuses_auto
            + self.other_bonuses_manual
            + self.marketing_expenses
        )

    def finalize(self) -> "MonthlyResultRow":
        costs = self.costs
        self.net = self.revenue - costs
        self.roi_percent = self.net / costs * HUNDRED if costs > 0 else ZERO
        return self

    def as_dict(self) -> dict:
        return asdict(self)


# ----------------------------------------------------------------------
# Month helpers
# ----------------------------------------------------------------------

def parse_month(value: str) -> MonthWindow:
    """``"2024-01"`` -> ``MonthWindow``; raises ``ValidationError("month")``."""
    try:
        year_str, month_str = str(value).split("-")
        year, month = int(year_str), int(month_str)
        if len(year_str) != 4 or len(month_str) != 2:
            raise ValueError(value)
        return MonthWindow.for_month(year, month)
    except (TypeError, ValueError):
        raise ValidationError("month", f"Invalid month {value!r}; expected YYYY-MM.") from None


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_windows(months_back: int, through: date | None = None) -> list[MonthWindow]:
    """The ``months_back`` calendar months ending with ``through``'s month, newest first."""
    if months_back < 1:
        raise ValidationError("months_back", "months_back must be a positive integer.")
    through = through or timezone.localdate()
    return [
        MonthWindow.for_month(*shift_month(through.year, through.month, -offset))
        for offset in range(months_back)
    ]


def month_range(start_key: str, end_key: str) -> list[MonthWindow]:
    """Every month from ``start_key`` to ``end_key`` inclusive, oldest first."""
    first, last = parse_month(start_key), parse_month(end_key)
    if last.start < first.start:
        raise ValidationError("end_month", "end_month must not be before start_month.")
    months = []
    year, month = first.start.year, first.start.month
    while (year, month) <= (last.start.year, last.start.month):
        months.append(MonthWindow.for_month(year, month))
        year, month = shift_month(year, month, 1)
    return months


def validate_months(months) -> list[MonthWindow]:
    months = list(months or [])
    if not months:
        raise ValidationError("months", "At least one month is required.")
    seen = set()
    for window in months:
        if not isinstance(window, MonthWindow):
            raise ValidationError("months", f"{window!r} is not a month window.")
        expected = MonthWindow.for_month(window.start.year, window.start.month)
        if window != expected:
            raise ValidationError(
                "months",
                f"{window.key} is not a calendar month ({window.start} to {window.end}).",
            )
        if window.key in seen:
            raise ValidationError("months", f"Month {window.key} is listed twice.")
        seen.add(window.key)
    return months


# ----------------------------------------------------------------------
# Engine
# ----------------------------------------------------------------------

@dataclass
class _PersonFacts:
    sales: list
    plans: list
    inputs: dict
    external: dict


class RoiRollupEngine:
    """Compute monthly ROI rows for people of one organization."""

    def __init__(self, organization_id) -> None:
        self.organization_id = organization_id
        self._lob_cache: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute_monthly_rollup(self, person_id, months, statuses=None) -> list[MonthlyResultRow]:
        """Rows for ``person_id`` over ``months``, most recent month first.

        Raises:
            NotFoundError: the person does not belong to the organization.
            ValidationError: ``months`` is empty or not made of calendar months.
        """
        months = validate_months(months)
        person = self.get_person(person_id)

        facts = self._load_facts([person.pk], months, statuses)
        rates = self._load_rates(months)
        return self._rollup(facts[str(person.pk)], rates, months)

    def get_person(self, person_id):
        """The organization's person ``person_id``; raises ``NotFoundError("person_id")``."""
        from agencies.models import Person

        try:
            person = Person.objects.filter(pk=person_id, organization_id=self.organization_id).first()
        except (ValueError, DjangoValidationError):
            person = None
        if person is None:
            raise NotFoundError("person_id", "Person not found.")
        return person

    def compute_org_summary(self, months, statuses=None, person_ids=None) -> dict:
        """Per-person totals over ``months`` plus an org total equal to their sum."""
        from agencies.models import Person

        months = validate_months(months)
        people = Person.objects.filter(organization_id=self.organization_id).select_related("role")
        if person_ids:
            people = people.filter(pk__in=person_ids)
        people = list(people.order_by("full_name"))

        facts = self._load_facts([p.pk for p in people], months, statuses)
        rates = self._load_rates(months)

        rows = []
        total = MonthlyResultRow(month="total")
        for person in people:
            person_total = MonthlyResultRow(month="total")
            for row in self._rollup(facts[str(person.pk)], rates, months):
                _accumulate(person_total, row)
            person_total.finalize()
            if not person.is_active and person_total.apps == 0 and person_total.costs == 0:
                continue
            _accumulate(total, person_total)
            rows.append({
                "person_id": str(person.pk),
                "person_name": person.full_name,
                "role_name": person.role.name if person.role_id else None,
                **_without_month(person_total.as_dict()),
            })
        total.finalize()
        logger.debug(
            "ROI summary org=%s months=%s people=%d",
            self.organization_id,
            [m.key for m in months],
            len(rows),
        )
        return {"people": rows, "totals": _without_month(total.as_dict())}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _rollup(self, facts: _PersonFacts, rates: list, months) -> list[MonthlyResultRow]:
        rates_by_lob = defaultdict(list)
        for rate in rates:
            rates_by_lob[rate.lob].append(rate)

        sales_by_month = defaultdict(list)
        for sale in facts.sales:
            sales_by_month[f"{sale.date_sold.year}-{sale.date_sold.month:02d}"].append(sale)

        rows = [
            self._compute_month(window, rates_by_lob, sales_by_month[window.key], facts)
            for window in months
        ]
        rows.sort(key=lambda row: row.month, reverse=True)
        return rows

    def _compute_month(self, window: MonthWindow, rates_by_lob, sales, facts: _PersonFacts) -> MonthlyResultRow:
        from roi.intervals import active_during, resolve_active

        rate_map = {}
        for lob in CANONICAL_LOBS:
            active = resolve_active(rates_by_lob.get(lob, ()), window.start)
            rate_map[lob] = active.rate if active is not None else ZERO

        row = MonthlyResultRow(month=window.key)
        for sale in sales:
            lob = self._normalize(sale)
            row.apps += 1
            row.premium += sale.premium
            row.revenue += sale.premium * rate_map.get(lob, ZERO)

        row.salary = sum(
            (plan.monthly_salary for plan in active_during(facts.plans, window.start, window.end)),
            ZERO,
        )

        manual = facts.inputs.get(window.key)
        external = facts.external.get(window.key)
        if external is not None:
            row.commissions_paid = external.total_earnings
            row.commission_paid_from_external = True
        elif manual is not None:
            row.commissions_paid = manual.commission_paid or ZERO

        if manual is not None:
            row.lead_spend = manual.lead_spend or ZERO
            row.other_bonuses_manual = manual.other_bonuses_manual or ZERO
            row.marketing_expenses = manual.marketing_expenses or ZERO

        return row.finalize()

    def _normalize(self, sale) -> str:
        raw = sale.line_of_business.name if sale.line_of_business_id else sale.lob_name
        if raw not in self._lob_cache:
            self._lob_cache[raw] = normalize_lob(raw)
        return self._lob_cache[raw]

    def _load_rates(self, months) -> list:
        from roi.models import CommissionRate

        first = min(m.start for m in months)
        last = max(m.start for m in months)
        return list(
            CommissionRate.objects.filter(
                organization_id=self.organization_id,
                effective_start__lte=last,
            ).exclude(effective_end__lt=first)
        )

    def _load_facts(self, person_ids, months, statuses) -> dict[str, _PersonFacts]:
        from production.models import SaleEvent, sanitize_statuses
        from roi.models import CompensationPlan, ExternalMonthlyResult, MonthlyManualInput

        first = min(m.start for m in months)
        last = max(m.end for m in months)
        keys = [m.key for m in months]
        facts = {str(pid): _PersonFacts(sales=[], plans=[], inputs={}, external={}) for pid in person_ids}

        sales = (
            SaleEvent.objects
            .filter(
                organization_id=self.organization_id,
                person_id__in=person_ids,
                date_sold__gte=first,
                date_sold__lte=last,
                status__in=sanitize_statuses(statuses),
            )
            .select_related("line_of_business")
        )
        for sale in sales:
            facts[str(sale.person_id)].sales.append(sale)

        plans = (
            CompensationPlan.objects
            .filter(organization_id=self.organization_id, person_id__in=person_ids, effective_start__lte=last)
            .exclude(effective_end__lt=first)
        )
        for plan in plans:
            facts[str(plan.person_id)].plans.append(plan)

        for manual in MonthlyManualInput.objects.filter(
            organization_id=self.organization_id, person_id__in=person_ids, month__in=keys
        ):
            facts[str(manual.person_id)].inputs[manual.month] = manual

        for result in ExternalMonthlyResult.objects.filter(
            organization_id=self.organization_id, person_id__in=person_ids, month__in=keys
        ):
            facts[str(result.person_id)].external[result.month] = result

        return facts


def _accumulate(total: MonthlyResultRow, row: MonthlyResultRow) -> None:
    total.apps += row.apps
    total.premium += row.premium
    total.revenue += row.revenue
    total.salary += row.salary
    total.commissions_paid += row.commissions_paid
    total.commission_paid_from_external = total.commission_paid_from_external or row.commission_paid_from_external
    total.lead_spend += row.lead_spend
    total.other_bonuses_auto += row.other_bonuses_auto
    total.other_bonuses_manual += row.other_bonuses_manual
    total.marketing_expenses += row.marketing_expenses


def _without_month(data: dict) -> dict:
    data.pop("month", None)
    return data
