"""Write services for benchmarks: role expectations, person overrides, snapshots.

Each write validates the complete payload before anything is saved, so a
rejected request leaves no partial state behind.
"""
from __future__ import annotations

import logging
import uuid
from datetime import date

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from benchmarks.models import PersonOverride, ReportSnapshot, RoleExpectation
from benchmarks.report import BenchmarksReportBuilder
from benchmarks.validators import (
    optional_non_negative_int,
    optional_non_negative_number,
    validate_bucket_breakdown,
    validate_goal_map,
    validate_optional_premium_targets,
)
from core.exceptions import NotFoundError, ValidationError
from production.models import sanitize_statuses

logger = logging.getLogger("salesroi")

SNAPSHOT_LIST_LIMIT = 50
TITLE_MAX_LENGTH = 140


def _get_in_org(model, organization, object_id, field: str, **lookup):
    try:
        object_id = uuid.UUID(str(object_id))
    except (TypeError, ValueError):
        raise NotFoundError(field) from None
    try:
        return model.objects.get(pk=object_id, organization=organization, **lookup)
    except model.DoesNotExist:
        raise NotFoundError(field) from None


def _parse_iso(value, field: str) -> date:
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be an ISO date (YYYY-MM-DD).")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(field, f"{field} must be an ISO date (YYYY-MM-DD).") from None


# ----------------------------------------------------------------------
# Role expectations
# ----------------------------------------------------------------------

@transaction.atomic
def save_role_expectation(*, organization, role_id, premium_by_bucket, app_goals_by_lob=None, activity_targets_by_type=None):
    """Create or replace the expectation attached to an org role."""
    from agencies.models import OrgRole

    app_goals = validate_goal_map(app_goals_by_lob, "appGoalsByLob")
    buckets = validate_bucket_breakdown(premium_by_bucket, "premiumByBucket")
    activities = validate_goal_map(activity_targets_by_type, "activityTargetsByType")
    role = _get_in_org(OrgRole, organization, role_id, "roleId")

    expectation, created = RoleExpectation.objects.update_or_create(
        role=role,
        defaults={
            "app_goals_by_lob": app_goals,
            "premium_by_bucket": buckets,
            "activity_targets_by_type": activities,
        },
    )
    logger.info(
        "Role expectation %s org=%s role=%s apps=%s premium=%s",
        "created" if created else "updated",
        organization.pk,
        role.pk,
        expectation.monthly_apps_target,
        expectation.monthly_premium_target,
    )
    return expectation


@transaction.atomic
def delete_role_expectation(*, organization, role_id) -> bool:
    from agencies.models import OrgRole

    role = _get_in_org(OrgRole, organization, role_id, "roleId")
    deleted, _ = RoleExpectation.objects.filter(role=role).delete()
    if deleted:
        logger.info("Role expectation deleted org=%s role=%s", organization.pk, role.pk)
    return bool(deleted)


# ----------------------------------------------------------------------
# Person overrides
# ----------------------------------------------------------------------

@transaction.atomic
def save_person_override(
    *,
    organization,
    person_id,
    monthly_apps_override=None,
    monthly_premium_override=None,
    premium_mode_override=None,
    premium_by_lob_override=None,
    premium_by_bucket_override=None,
    app_goals_by_lob_override=None,
    activity_targets_by_type_override=None,
):
    """Upsert a person's overrides. ``None`` clears a field back to "inherit"."""
    from agencies.models import LineOfBusiness, Person

    apps = optional_non_negative_int(monthly_apps_override, "monthlyAppsOverride")
    premium = optional_non_negative_number(monthly_premium_override, "monthlyPremiumOverride")
    known_lob_ids = {
        str(pk) for pk in LineOfBusiness.objects.filter(organization=organization).values_list("pk", flat=True)
    }
    targets = validate_optional_premium_targets(
        premium_mode_override,
        premium_by_lob_override,
        premium_by_bucket_override,
        known_lob_ids=known_lob_ids,
    )
    app_goals = None
    if app_goals_by_lob_override is not None:
        app_goals = validate_goal_map(app_goals_by_lob_override, "appGoalsByLobOverride")
    activities = None
    if activity_targets_by_type_override is not None:
        activities = validate_goal_map(activity_targets_by_type_override, "activityTargetsByTypeOverride")
    person = _get_in_org(Person, organization, person_id, "personId")

    override, created = PersonOverride.objects.update_or_create(
        person=person,
        defaults={
            "monthly_apps_override": apps,
            "monthly_premium_override": premium,
            "premium_mode_override": targets.premium_mode,
            "premium_by_lob_override": targets.premium_by_lob,
            "premium_by_bucket_override": targets.premium_by_bucket,
            "app_goals_by_lob_override": app_goals,
            "activity_targets_by_type_override": activities,
        },
    )
    logger.info(
        "Person override %s org=%s person=%s mode=%s",
        "created" if created else "updated",
        organization.pk,
        person.pk,
        targets.premium_mode,
    )
    return override


# ----------------------------------------------------------------------
# Snapshots
# ----------------------------------------------------------------------

def default_snapshot_title(start_iso: str, end_iso: str) -> str:
    return f"Benchmarks: {start_iso} to {end_iso}"


@transaction.atomic
def create_benchmarks_snapshot(
    *,
    organization,
    start_iso,
    end_iso,
    statuses=None,
    title="",
    payload=None,
    user=None,
    report_type=ReportSnapshot.ReportType.BENCHMARKS,
):
    """Persist a benchmarks report payload as-is.

    When ``payload`` is omitted the report is computed for the window first.
    """
    if report_type != ReportSnapshot.ReportType.BENCHMARKS:
        raise ValidationError("reportType", "reportType must be 'benchmarks'.")
    start = _parse_iso(start_iso, "startISO")
    end = _parse_iso(end_iso, "endISO")
    if end < start:
        raise ValidationError("endISO", "endISO must be on or after startISO.")
    statuses = sanitize_statuses(statuses)

    if payload is None:
        payload = BenchmarksReportBuilder(organization, start, end, statuses=statuses).build().to_payload()
    elif not isinstance(payload, dict):
        raise ValidationError("payload", "payload must be an object.")

    title = (title or "").strip() or default_snapshot_title(start.isoformat(), end.isoformat())
    snapshot = ReportSnapshot.objects.create(
        organization=organization,
        report_type=report_type,
        title=title[:TITLE_MAX_LENGTH],
        start_iso=start.isoformat(),
        end_iso=end.isoformat(),
        statuses_csv=",".join(statuses),
        payload=payload,
        meta={
            "generatedAt": timezone.now().isoformat(),
            "version": getattr(settings, "BENCHMARKS_SNAPSHOT_VERSION", 1),
        },
        created_by=user if user is not None and user.is_authenticated else None,
    )
    logger.info(
        "Snapshot saved org=%s id=%s range=%s..%s",
        organization.pk,
        snapshot.pk,
        snapshot.start_iso,
        snapshot.end_iso,
    )
    return snapshot


def list_snapshots(organization, limit: int = SNAPSHOT_LIST_LIMIT):
    return list(
        ReportSnapshot.objects
        .filter(organization=organization)
        .select_related("created_by")
        .order_by("-created_at")[:limit]
    )


def get_snapshot(organization, snapshot_id) -> ReportSnapshot:
    return _get_in_org(ReportSnapshot, organization, snapshot_id, "id")
