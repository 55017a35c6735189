"""API views for benchmarks: expectations, overrides, report, export, snapshots."""
from __future__ import annotations

import logging
import uuid
from datetime import date

from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from agencies.viewer import resolve_viewer
from api.v1.permissions import (
    CanManageSnapshots,
    CanViewReports,
    CanWriteBenchmarks,
    HasOrganization,
)
from benchmarks import services
from benchmarks.benchmark_serializers import (
    PersonOverrideSerializer,
    RoleExpectationSerializer,
    SnapshotDetailSerializer,
    SnapshotListSerializer,
)
from benchmarks.export import benchmarks_csv_response
from benchmarks.models import PersonOverride, RoleExpectation
from benchmarks.report import BenchmarksReportBuilder
from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

_BENCHMARKS_WRITE = [permissions.IsAuthenticated, HasOrganization, CanWriteBenchmarks]
_REPORT_READ = [permissions.IsAuthenticated, HasOrganization, CanViewReports]


def _parse_date(value, field, default=None):
    if value in (None, ""):
        return default
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError(field, f"{field} must be an ISO date (YYYY-MM-DD).") from None


def _id_list(raw, field):
    if raw in (None, ""):
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(field, f"{field} must be a list.")
    try:
        return [str(uuid.UUID(str(item).strip())) for item in raw if str(item).strip()]
    except ValueError:
        raise ValidationError(field, f"{field} must contain ids.") from None


def _report_window(start_raw, end_raw):
    """Default window is the current month to date."""
    today = timezone.localdate()
    start = _parse_date(start_raw, "dateFrom", default=today.replace(day=1))
    end = _parse_date(end_raw, "dateTo", default=today)
    return start, end


# ────────────────────────────────────────────────────────────
# Setup
# ────────────────────────────────────────────────────────────

class RoleExpectationView(APIView):
    """
    GET    /api/v1/benchmarks/role-expectations/
    POST   /api/v1/benchmarks/role-expectations/  {roleId, premiumByBucket, appGoalsByLob?, activityTargetsByType?}
    DELETE /api/v1/benchmarks/role-expectations/  {roleId}
    """
    permission_classes = _BENCHMARKS_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        qs = (
            RoleExpectation.objects
            .filter(role__organization=viewer.organization)
            .select_related("role")
            .order_by("role__name")
        )
        return Response({"expectations": RoleExpectationSerializer(qs, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        expectation = services.save_role_expectation(
            organization=viewer.organization,
            role_id=data.get("roleId"),
            app_goals_by_lob=data.get("appGoalsByLob"),
            premium_by_bucket=data.get("premiumByBucket"),
            activity_targets_by_type=data.get("activityTargetsByType"),
        )
        return Response({"expectation": RoleExpectationSerializer(expectation).data})

    def delete(self, request):
        viewer = resolve_viewer(request)
        role_id = request.data.get("roleId") or request.query_params.get("roleId")
        deleted = services.delete_role_expectation(organization=viewer.organization, role_id=role_id)
        return Response({"deleted": deleted})


class PersonOverrideView(APIView):
    """
    GET  /api/v1/benchmarks/person-overrides/
    POST /api/v1/benchmarks/person-overrides/  {personId, monthlyAppsOverride?, ...}
    """
    permission_classes = _BENCHMARKS_WRITE

    def get(self, request):
        viewer = resolve_viewer(request)
        qs = (
            PersonOverride.objects
            .filter(person__organization=viewer.organization)
            .select_related("person")
            .order_by("person__full_name")
        )
        return Response({"overrides": PersonOverrideSerializer(qs, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        override = services.save_person_override(
            organization=viewer.organization,
            person_id=data.get("personId"),
            monthly_apps_override=data.get("monthlyAppsOverride"),
            monthly_premium_override=data.get("monthlyPremiumOverride"),
            premium_mode_override=data.get("premiumModeOverride"),
            premium_by_lob_override=data.get("premiumByLobOverride"),
            premium_by_bucket_override=data.get("premiumByBucketOverride"),
            app_goals_by_lob_override=data.get("appGoalsByLobOverride"),
            activity_targets_by_type_override=data.get("activityTargetsByTypeOverride"),
        )
        return Response({"override": PersonOverrideSerializer(override).data})


# ────────────────────────────────────────────────────────────
# Report & export
# ────────────────────────────────────────────────────────────

class BenchmarksReportView(APIView):
    """
    POST /api/v1/reports/benchmarks/  {dateFrom?, dateTo?, statuses?, personIds?, lobIds?, asOf?}
    Office, breakdown and people rows with pacing.
    """
    permission_classes = _REPORT_READ

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        start, end = _report_window(
            data.get("dateFrom") or data.get("start"),
            data.get("dateTo") or data.get("end"),
        )
        report = BenchmarksReportBuilder(
            viewer.organization,
            start,
            end,
            statuses=data.get("statuses"),
            person_ids=_id_list(data.get("personIds"), "personIds"),
            lob_ids=_id_list(data.get("lobIds"), "lobIds"),
            as_of=_parse_date(data.get("asOf"), "asOf"),
        ).build()
        return Response(report.to_payload())


class BenchmarksExportView(APIView):
    """
    GET /api/v1/reports/benchmarks/export/?start=YYYY-MM-DD&end=YYYY-MM-DD[&statuses=..][&as_of=..]
    CSV download of the same report.
    """
    permission_classes = _REPORT_READ

    def get(self, request):
        viewer = resolve_viewer(request)
        params = request.query_params
        start, end = _report_window(params.get("start"), params.get("end"))
        report = BenchmarksReportBuilder(
            viewer.organization,
            start,
            end,
            statuses=params.get("statuses"),
            person_ids=_id_list(params.get("person_ids"), "person_ids"),
            lob_ids=_id_list(params.get("lob_ids"), "lob_ids"),
            as_of=_parse_date(params.get("as_of"), "as_of"),
        ).build()
        return benchmarks_csv_response(report.to_payload())


# ────────────────────────────────────────────────────────────
# Snapshots
# ────────────────────────────────────────────────────────────

class SnapshotListView(APIView):
    """
    GET  /api/v1/reports/snapshots/   latest snapshots of the organization
    POST /api/v1/reports/snapshots/  {reportType, startISO, endISO, statuses?, title?, payload?}
    """
    permission_classes = [permissions.IsAuthenticated, HasOrganization, CanManageSnapshots]

    def get(self, request):
        viewer = resolve_viewer(request)
        snapshots = services.list_snapshots(viewer.organization)
        return Response({"snapshots": SnapshotListSerializer(snapshots, many=True).data})

    def post(self, request):
        viewer = resolve_viewer(request)
        data = request.data
        snapshot = services.create_benchmarks_snapshot(
            organization=viewer.organization,
            report_type=data.get("reportType", "benchmarks"),
            start_iso=data.get("startISO"),
            end_iso=data.get("endISO"),
            statuses=data.get("statuses"),
            title=data.get("title", ""),
            payload=data.get("payload"),
            user=request.user,
        )
        return Response(
            {"snapshot": SnapshotDetailSerializer(snapshot).data},
            status=status.HTTP_201_CREATED,
        )


class SnapshotDetailView(APIView):
    """GET /api/v1/reports/snapshots/<id>/  stored payload, never recomputed."""
    permission_classes = _REPORT_READ

    def get(self, request, snapshot_id):
        viewer = resolve_viewer(request)
        snapshot = services.get_snapshot(viewer.organization, snapshot_id)
        return Response({"snapshot": SnapshotDetailSerializer(snapshot).data})
