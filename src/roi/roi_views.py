"""API views for the ROI module."""
from __future__ import annotations

import logging
import uuid

from django.conf import settings
from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from agencies.viewer import resolve_viewer
from api.v1.permissions import CanViewReports, CanWriteRoi, HasOrganization
from core.exceptions import ValidationError
from roi import services
from roi.engine import RoiRollupEngine, month_range, month_windows
from roi.models import (
    CommissionRate,
    CompensationPlan,
    ExternalMonthlyResult,
    MonthlyManualInput,
)
from roi.roi_serializers import (
    CommissionRateSerializer,
    CompensationPlanSerializer,
    ExternalMonthlyResultSerializer,
    MonthlyManualInputSerializer,
    MonthlyResultRowSerializer,
    PersonRoiTotalsSerializer,
    RoiTotalsSerializer,
)

logger = logging.getLogger(__name__)

_ROI_WRITE = [permissions.IsAuthenticated, HasOrganization, CanWriteRoi]
_ROI_READ = [permissions.IsAuthenticated, HasOrganization, CanViewReports]


def _months_back(raw) -> int:
    default = getattr(settings, "ROI_DEFAULT_MONTHS_BACK", 12)
    ceiling = getattr(settings, "ROI_MAX_MONTHS_BACK", 36)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError("monthsBack", "monthsBack must be a positive integer.") from None
    if value < 1:
        return default
    return min(value, ceiling)


def _id_list(raw, field):
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(field, f"{field} must be a list.")
    ids = [str(item).strip() for item in raw if str(item).strip()]
    try:
        return [str(uuid.UUID(item)) for item in ids]
    except ValueError:
        raise ValidationError(field, f"{field} must contain ids.") from None


# ────────────────────────────────────────────────────────────
# Commission rates
# ────────────────────────────────────────────────────────────

class CommissionRateListView(APIView):
    """
    GET  /api/v1/roi/rates/[?active_on=YYYY-MM-DD]
    POST /api/v1/roi/rates/  {lob, rate, effectiveStart, effectiveEnd?}
    """
    permission_classes = _ROI_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        active_on = request.query_params.get("active_on")
        if active_on:
            as_of = services.to_date(active_on, "active_on")
            rates = services.active_rates(viewer.organization, as_of)
        else:
            rates = CommissionRate.objects.filter(organization=viewer.organization)
        return Response({"rates": CommissionRateSerializer(rates, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        rate = services.save_commission_rate(
            organization=viewer.organization,
            lob=data.get("lob"),
            rate=data.get("rate"),
            effective_start=data.get("effectiveStart"),
            effective_end=data.get("effectiveEnd"),
        )
        return Response({"rate": CommissionRateSerializer(rate).data}, status=status.HTTP_200_OK)


# ────────────────────────────────────────────────────────────
# Compensation plans
# ────────────────────────────────────────────────────────────

class CompensationPlanListView(APIView):
    """
    GET  /api/v1/roi/comp-plans/[?person=<id>]
    POST /api/v1/roi/comp-plans/  {personId, monthlySalary, effectiveStart, effectiveEnd?, label?}
    """
    permission_classes = _ROI_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        qs = CompensationPlan.objects.filter(organization=viewer.organization).select_related("person")
        person_id = request.query_params.get("person")
        if person_id:
            qs = qs.filter(person=RoiRollupEngine(viewer.org_id).get_person(person_id))
        return Response({"plans": CompensationPlanSerializer(qs, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        plan = services.save_compensation_plan(
            organization=viewer.organization,
            person_id=data.get("personId"),
            monthly_salary=data.get("monthlySalary"),
            effective_start=data.get("effectiveStart"),
            effective_end=data.get("effectiveEnd"),
            label=data.get("label", ""),
        )
        return Response({"plan": CompensationPlanSerializer(plan).data})


# ────────────────────────────────────────────────────────────
# Monthly manual inputs
# ────────────────────────────────────────────────────────────

class MonthlyInputListView(APIView):
    """
    GET  /api/v1/roi/monthly-inputs/?month=YYYY-MM | ?start_month=..&end_month=..[&person=<id>]
    POST /api/v1/roi/monthly-inputs/  {personId, month, commissionPaid, leadSpend?, ...}
    """
    permission_classes = _ROI_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        params = request.query_params
        month = params.get("month")
        start_month = params.get("start_month") or month
        end_month = params.get("end_month") or month
        if not start_month or not end_month:
            raise ValidationError("month", "Provide month, or start_month and end_month.")
        keys = [m.key for m in month_range(start_month, end_month)]

        qs = (
            MonthlyManualInput.objects
            .filter(organization=viewer.organization, month__in=keys)
            .order_by("month", "person__full_name")
        )
        person_id = params.get("person")
        if person_id:
            qs = qs.filter(person=RoiRollupEngine(viewer.org_id).get_person(person_id))
        return Response({"inputs": MonthlyManualInputSerializer(qs, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        record = services.upsert_monthly_input(
            organization=viewer.organization,
            person_id=data.get("personId"),
            month=data.get("month"),
            commission_paid=data.get("commissionPaid"),
            lead_spend=data.get("leadSpend"),
            other_bonuses_manual=data.get("otherBonusesManual"),
            marketing_expenses=data.get("marketingExpenses"),
            notes=data.get("notes", ""),
        )
        return Response({"input": MonthlyManualInputSerializer(record).data})


class ExternalResultListView(APIView):
    """
    GET  /api/v1/roi/external-results/?month=YYYY-MM
    POST /api/v1/roi/external-results/  {personId, month, totalEarnings, source?}
    """
    permission_classes = _ROI_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        qs = ExternalMonthlyResult.objects.filter(organization=viewer.organization)
        month = request.query_params.get("month")
        if month:
            qs = qs.filter(month=services.validate_month_key(month))
        return Response({"results": ExternalMonthlyResultSerializer(qs, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        record = services.upsert_external_result(
            organization=viewer.organization,
            person_id=data.get("personId"),
            month=data.get("month"),
            total_earnings=data.get("totalEarnings"),
            source=data.get("source", ""),
        )
        return Response({"result": ExternalMonthlyResultSerializer(record).data})


# ────────────────────────────────────────────────────────────
# Reports
# ────────────────────────────────────────────────────────────

class PersonRoiReportView(APIView):
    """
    POST /api/v1/reports/roi/person/  {personId, monthsBack?, statuses?}
    Monthly ROI rows for one person, most recent month first.
    """
    permission_classes = _ROI_READ

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        person_id = str(data.get("personId") or "").strip()
        if not person_id:
            raise ValidationError("personId", "personId is required.")

        engine = RoiRollupEngine(viewer.org_id)
        person = engine.get_person(person_id)
        months = month_windows(_months_back(data.get("monthsBack")), through=timezone.localdate())
        rows = engine.compute_monthly_rollup(person.pk, months, statuses=data.get("statuses"))

        return Response({
            "personId": str(person.pk),
            "personName": person.full_name,
            "months": MonthlyResultRowSerializer(rows, many=True).data,
        })


class RoiSummaryReportView(APIView):
    """
    POST /api/v1/reports/roi/  {startMonth, endMonth, statuses?, personIds?}
    Per-person totals over the range; ``totals`` is the sum of the people rows.
    """
    permission_classes = _ROI_READ

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        current = timezone.localdate().strftime("%Y-%m")
        start_month = data.get("startMonth") or current
        end_month = data.get("endMonth") or start_month
        months = month_range(start_month, end_month)
        if len(months) > getattr(settings, "ROI_MAX_MONTHS_BACK", 36):
            raise ValidationError("endMonth", "Range is too long.")

        engine = RoiRollupEngine(viewer.org_id)
        summary = engine.compute_org_summary(
            months,
            statuses=data.get("statuses"),
            person_ids=_id_list(data.get("personIds"), "personIds") or None,
        )
        return Response({
            "startMonth": months[0].key,
            "endMonth": months[-1].key,
            "people": PersonRoiTotalsSerializer(summary["people"], many=True).data,
            "totals": RoiTotalsSerializer(summary["totals"]).data,
        })
