"""Benchmarks report: actual vs expected production at person, breakdown and office level.

Assembly is bottom-up:

1. every person row is computed first (actuals from sale events, targets
   from the override/role cascade pro-rated over the window), and split
   into breakdown cells (premium bucket, or line of business);
2. a breakdown row is the sum of the matching person cells;
3. the office row is the sum of the person rows.

Targets are split with round-down shares and the remainder on the last
cell, so cells add up exactly to their person row and every level is the
exact sum of the level below.
"""
from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal

from django.utils import timezone

from benchmarks.models import PremiumMode
from benchmarks.pacing import pace
from benchmarks.targets import ExpectationSource, TargetResolutionService, resolve_targets
from core.exceptions import ValidationError
from production.lob import BUCKET_PC, BUCKETS, canonical_lob, lob_to_bucket, normalize_lob

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
UNKNOWN_LOB_KEY = "unknown"


@dataclass
class Totals:
    apps_actual: int = 0
    apps_target: Decimal = ZERO
    premium_actual: Decimal = ZERO
    premium_target: Decimal = ZERO

    def add(self, other: "Totals") -> None:
        self.apps_actual += other.apps_actual
        self.apps_target += other.apps_target
        self.premium_actual += other.premium_actual
        self.premium_target += other.premium_target


@dataclass
class PersonRow:
    person_id: str
    name: str
    role_name: str | None
    source: ExpectationSource
    breakdown_mode: str | None
    totals: Totals = field(default_factory=Totals)
    cells: dict[str, Totals] = field(default_factory=lambda: defaultdict(Totals))


@dataclass
class BreakdownRow:
    key: str
    label: str
    category: str | None
    totals: Totals = field(default_factory=Totals)


@dataclass
class BenchmarksReport:
    start: date
    end: date
    as_of: date
    statuses: list[str]
    plan_mode: str | None
    breakdown_mode: str
    office: Totals
    breakdown: list[BreakdownRow]
    people: list[PersonRow]

    def _pace(self, actual, target):
        return pace(actual, target, self.start, self.end, self.as_of)

    def to_payload(self) -> dict:
        office_apps = self._pace(self.office.apps_actual, self.office.apps_target)
        office_premium = self._pace(self.office.premium_actual, self.office.premium_target)
        return {
            "range": {
                "start": self.start.isoformat(),
                "end": self.end.isoformat(),
                "asOf": self.as_of.isoformat(),
            },
            "statuses": list(self.statuses),
            "office": {
                "planMode": self.plan_mode,
                "appsActual": self.office.apps_actual,
                "appsTarget": _num(self.office.apps_target),
                "premiumActual": _num(self.office.premium_actual),
                "premiumTarget": _num(self.office.premium_target),
                "appsDelta": _num(office_apps.delta),
                "premiumDelta": _num(office_premium.delta),
                "pace": {
                    "appsPace": _ratio(office_apps.pace_ratio),
                    "premiumPace": _ratio(office_premium.pace_ratio),
                },
            },
            "breakdown": {
                "mode": self.breakdown_mode,
                "rows": [
                    {
                        "key": row.label,
                        "category": row.category,
                        "appsActual": row.totals.apps_actual,
                        "appsTarget": _num(row.totals.apps_target),
                        "premiumActual": _num(row.totals.premium_actual),
                        "premiumTarget": _num(row.totals.premium_target),
                        "premiumDelta": _num(row.totals.premium_actual - row.totals.premium_target),
                        "pacePremium": _ratio(
                            self._pace(row.totals.premium_actual, row.totals.premium_target).pace_ratio
                        ),
                    }
                    for row in self.breakdown
                ],
            },
            "people": [
                {
                    "personId": person.person_id,
                    "name": person.name,
                    "roleName": person.role_name,
                    "appsActual": person.totals.apps_actual,
                    "appsTarget": _num(person.totals.apps_target),
                    "premiumActual": _num(person.totals.premium_actual),
                    "premiumTarget": _num(person.totals.premium_target),
                    "premiumDelta": _num(person.totals.premium_actual - person.totals.premium_target),
                    "pacePremium": _ratio(
                        self._pace(person.totals.premium_actual, person.totals.premium_target).pace_ratio
                    ),
                    "expectationSource": person.source.value,
                }
                for person in self.people
            ],
        }


def _num(value: Decimal):
    return float(Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def _ratio(value):
    if value is None:
        return None
    return float(Decimal(value).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP))


def window_month_fraction(start: date, end: date) -> Decimal:
    """How many months of target fit in ``[start, end]``.

    Each calendar month touched contributes ``days covered / days in month``.
    """
    total = ZERO
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        days_in_month = calendar.monthrange(year, month)[1]
        first = max(start, date(year, month, 1))
        last = min(end, date(year, month, days_in_month))
        total += Decimal((last - first).days + 1) / Decimal(days_in_month)
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return total


def split_total(total: Decimal, weights: dict[str, Decimal], fallback_key: str) -> dict[str, Decimal]:
    """Split ``total`` across ``weights`` keys proportionally, summing exactly to ``total``."""
    if total == 0:
        return {}
    positive = [(key, weight) for key, weight in weights.items() if weight > 0]
    if not positive:
        return {fallback_key: total}
    weight_sum = sum((weight for _, weight in positive), ZERO)
    shares = {}
    allocated = ZERO
    for key, weight in positive[:-1]:
        share = (total * weight / weight_sum).quantize(CENT, rounding=ROUND_DOWN)
        shares[key] = share
        allocated += share
    last_key = positive[-1][0]
    shares[last_key] = shares.get(last_key, ZERO) + total - allocated
    return shares


class BenchmarksReportBuilder:
    """Assemble a ``BenchmarksReport`` for one organization and date window."""

    def __init__(self, organization, start: date, end: date, statuses=None, person_ids=None, lob_ids=None, as_of=None):
        from production.models import sanitize_statuses

        if start is None or end is None:
            raise ValidationError("dateFrom", "Both dateFrom and dateTo are required.")
        if end < start:
            raise ValidationError("dateTo", "dateTo must be on or after dateFrom.")
        self.organization = organization
        self.start = start
        self.end = end
        self.statuses = sanitize_statuses(statuses)
        self.person_ids = list(person_ids or [])
        self.lob_ids = [str(lob_id) for lob_id in lob_ids or []]
        self.as_of = as_of or timezone.localdate()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self) -> BenchmarksReport:
        self._load_lobs()
        people = self._load_people()
        resolutions = self._resolve(people)
        breakdown_mode = self._breakdown_mode(resolutions.values())
        fraction = window_month_fraction(self.start, self.end)

        rows: dict[str, PersonRow] = {}
        for person in people:
            resolution = resolutions[person.pk]
            rows[str(person.pk)] = PersonRow(
                person_id=str(person.pk),
                name=person.full_name,
                role_name=person.role.name if person.role_id else None,
                source=resolution.source,
                breakdown_mode=resolution.premium_mode,
            )
            if resolution.source != ExpectationSource.NONE:
                self._apply_targets(rows[str(person.pk)], resolution, breakdown_mode, fraction)

        self._apply_actuals(rows, breakdown_mode)

        people_rows = sorted(
            (
                row for row in rows.values()
                if row.source != ExpectationSource.NONE or row.totals.apps_actual
            ),
            key=lambda row: row.name.lower(),
        )

        office = Totals()
        for row in people_rows:
            office.add(row.totals)

        breakdown = self._breakdown_rows(people_rows, breakdown_mode)
        has_expectations = any(row.source != ExpectationSource.NONE for row in people_rows)
        report = BenchmarksReport(
            start=self.start,
            end=self.end,
            as_of=self.as_of,
            statuses=self.statuses,
            plan_mode=breakdown_mode if has_expectations else None,
            breakdown_mode=breakdown_mode,
            office=office,
            breakdown=breakdown,
            people=people_rows,
        )
        logger.debug(
            "Benchmarks report org=%s %s..%s people=%d mode=%s",
            self.organization.pk,
            self.start,
            self.end,
            len(people_rows),
            breakdown_mode,
        )
        return report

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load_lobs(self) -> None:
        from agencies.models import LineOfBusiness

        self.lobs = {
            str(lob.pk): lob
            for lob in LineOfBusiness.objects.filter(organization=self.organization)
        }

    def _load_people(self) -> list:
        from agencies.models import Person

        qs = Person.objects.filter(organization=self.organization).select_related("role")
        if self.person_ids:
            qs = qs.filter(pk__in=self.person_ids)
        return list(qs)

    def _resolve(self, people) -> dict:
        service = TargetResolutionService(self.organization.pk)
        no_target = resolve_targets()
        # Inactive people only appear through their sales, never through targets.
        return {
            person.pk: service.for_person(person) if person.is_active else no_target
            for person in people
        }

    @staticmethod
    def _breakdown_mode(resolutions) -> str:
        modes = {r.premium_mode for r in resolutions if r.premium_mode is not None}
        return PremiumMode.LOB if modes == {PremiumMode.LOB} else PremiumMode.BUCKET

    def _lob_bucket(self, key: str) -> str:
        lob = self.lobs.get(key)
        if lob is not None:
            return lob.premium_category
        return lob_to_bucket(canonical_lob(key))

    def _bucket_key(self, key: str) -> str:
        """Bucket code for a bucket code, an org LOB id or a free-text line name."""
        code = key.strip().upper()
        return code if code in BUCKETS else self._lob_bucket(key)

    def _fallback_lob_key(self) -> str:
        if not self.lobs:
            return UNKNOWN_LOB_KEY
        return min(self.lobs, key=lambda lob_id: self.lobs[lob_id].name.lower())

    def _premium_weights(self, resolution, mode) -> dict[str, Decimal]:
        breakdown = resolution.premium_breakdown
        if breakdown is None:
            return {}
        weights = breakdown.weights()
        if mode == PremiumMode.LOB:
            return weights
        by_bucket: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for key, amount in weights.items():
            by_bucket[self._bucket_key(key)] += amount
        return dict(by_bucket)

    def _app_weights(self, resolution, mode) -> dict[str, Decimal]:
        goals = {key: Decimal(int(value)) for key, value in resolution.app_goals_by_lob.items()}
        to_key = self._lob_key if mode == PremiumMode.LOB else self._lob_bucket
        weights: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for key, goal in goals.items():
            weights[to_key(key)] += goal
        return dict(weights)

    def _lob_key(self, key: str) -> str:
        """Org LOB id for an app-goal key given either as an id or as a line name."""
        if key in self.lobs:
            return key
        canonical = canonical_lob(key)
        for lob_id, lob in self.lobs.items():
            if canonical is not None and canonical_lob(lob.name) == canonical:
                return lob_id
        return key

    def _apply_targets(self, row: PersonRow, resolution, mode, fraction: Decimal) -> None:
        apps_target = (Decimal(resolution.apps_target) * fraction).quantize(CENT, rounding=ROUND_HALF_UP)
        premium_target = (resolution.premium_target * fraction).quantize(CENT, rounding=ROUND_HALF_UP)
        row.totals.apps_target = apps_target
        row.totals.premium_target = premium_target

        fallback = BUCKET_PC if mode == PremiumMode.BUCKET else self._fallback_lob_key()
        premium_weights = self._premium_weights(resolution, mode)
        app_weights = self._app_weights(resolution, mode)
        if not any(weight > 0 for weight in app_weights.values()):
            app_weights = premium_weights

        for key, share in split_total(apps_target, app_weights, fallback).items():
            row.cells[key].apps_target += share
        for key, share in split_total(premium_target, premium_weights, fallback).items():
            row.cells[key].premium_target += share

    def _apply_actuals(self, rows: dict[str, PersonRow], mode) -> None:
        from production.models import SaleEvent

        sales = (
            SaleEvent.objects
            .filter(
                organization=self.organization,
                date_sold__gte=self.start,
                date_sold__lte=self.end,
                status__in=self.statuses,
                person_id__in=[row.person_id for row in rows.values()],
            )
            .select_related("line_of_business")
        )
        if self.lob_ids:
            sales = sales.filter(line_of_business_id__in=self.lob_ids)

        for sale in sales:
            row = rows[str(sale.person_id)]
            key = self._sale_key(sale, mode)
            row.totals.apps_actual += 1
            row.totals.premium_actual += sale.premium
            row.cells[key].apps_actual += 1
            row.cells[key].premium_actual += sale.premium

    def _sale_key(self, sale, mode) -> str:
        if mode == PremiumMode.LOB:
            return str(sale.line_of_business_id) if sale.line_of_business_id else UNKNOWN_LOB_KEY
        if sale.line_of_business_id:
            return sale.line_of_business.premium_category
        return lob_to_bucket(normalize_lob(sale.lob_name))

    def _breakdown_rows(self, people_rows, mode) -> list[BreakdownRow]:
        if mode == PremiumMode.BUCKET:
            rows = [BreakdownRow(key=bucket, label=bucket, category=bucket) for bucket in BUCKETS]
        else:
            keys = set(self.lob_ids or self.lobs)
            for person in people_rows:
                keys.update(person.cells)
            rows = [self._lob_breakdown_row(key) for key in keys]
            rows.sort(key=lambda row: row.label.lower())

        by_key = {row.key: row for row in rows}
        for person in people_rows:
            for key, cell in person.cells.items():
                if mode == PremiumMode.BUCKET:
                    key = self._bucket_key(key)
                by_key[key].totals.add(cell)
        return rows

    def _lob_breakdown_row(self, key: str) -> BreakdownRow:
        lob = self.lobs.get(key)
        if lob is not None:
            return BreakdownRow(key=key, label=lob.name, category=lob.premium_category)
        if key == UNKNOWN_LOB_KEY:
            return BreakdownRow(key=key, label="Unknown", category=None)
        return BreakdownRow(key=key, label=key, category=self._lob_bucket(key))
