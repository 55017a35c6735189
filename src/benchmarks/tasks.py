"""Celery tasks for the benchmarks app."""
import logging
from datetime import timedelta

from celery import shared_task
from django.utils import timezone

logger = logging.getLogger("salesroi")


@shared_task(name="benchmarks.tasks.capture_benchmarks_snapshot")
def capture_benchmarks_snapshot(organization_id, start_iso, end_iso, statuses=None, title=""):
    """Compute the benchmarks report for a window and store it as a snapshot.

    Returns the snapshot id as a string.
    """
    from agencies.models import Organization
    from benchmarks.services import create_benchmarks_snapshot

    organization = Organization.objects.get(pk=organization_id)
    snapshot = create_benchmarks_snapshot(
        organization=organization,
        start_iso=start_iso,
        end_iso=end_iso,
        statuses=statuses,
        title=title,
    )
    return str(snapshot.pk)


@shared_task(name="benchmarks.tasks.capture_monthly_snapshots")
def capture_monthly_snapshots():
    """Snapshot the previous calendar month for every active organization.

    Scheduled daily; only acts on the 1st of the month.
    """
    from agencies.models import Organization
    from benchmarks.models import ReportSnapshot

    today = timezone.localdate()
    if today.day != 1:
        return "skipped"

    end = today - timedelta(days=1)
    start = end.replace(day=1)
    captured = 0
    for org_id in Organization.objects.filter(is_active=True).values_list("pk", flat=True):
        # Skip if the window was already captured
        if ReportSnapshot.objects.filter(
            organization_id=org_id,
            report_type=ReportSnapshot.ReportType.BENCHMARKS,
            start_iso=start.isoformat(),
            end_iso=end.isoformat(),
        ).exists():
            logger.debug("Benchmarks snapshot already exists for %s (%s..%s)", org_id, start, end)
            continue
        capture_benchmarks_snapshot(str(org_id), start.isoformat(), end.isoformat())
        captured += 1

    logger.info("Monthly benchmarks snapshots captured for %d organization(s) (%s..%s).", captured, start, end)
    return f"{captured} snapshot(s) captured"
