"""Expectations (targets) per role and per person, and saved report snapshots."""
from __future__ import annotations

import re
from contextlib import contextmanager
from decimal import Decimal

from django.conf import settings
from django.core import exceptions as django_exceptions
from django.db import models

from core.exceptions import DomainError
from core.models import TimeStampedModel


class PremiumMode(models.TextChoices):
    LOB = "LOB", "Per line of business"
    BUCKET = "BUCKET", "Per premium bucket"


@contextmanager
def _as_model_errors(field_names: dict):
    """Re-raise a ``DomainError`` as a Django ``ValidationError`` on the matching model field."""
    try:
        yield
    except DomainError as exc:
        root = re.split(r"[.\[]", exc.field or "", maxsplit=1)[0]
        raise django_exceptions.ValidationError(
            {field_names.get(root, django_exceptions.NON_FIELD_ERRORS): exc.message}
        ) from None


class RoleExpectation(TimeStampedModel):
    """Monthly targets shared by everyone holding a role.

    ``monthly_apps_target`` and ``monthly_premium_target`` are derived from
    the per-LOB app goals and the bucket premium goals on save.
    """

    role = models.OneToOneField(
        "agencies.OrgRole",
        on_delete=models.CASCADE,
        related_name="expectation",
    )
    app_goals_by_lob = models.JSONField(
        "app goals by LOB",
        default=dict,
        blank=True,
        help_text='{"<line of business id>": apps per month}',
    )
    premium_by_bucket = models.JSONField(
        "premium by bucket",
        default=dict,
        blank=True,
        help_text='{"PC": ..., "FS": ..., "IPS": ...}',
    )
    activity_targets_by_type = models.JSONField(
        "activity targets by type",
        default=dict,
        blank=True,
    )
    monthly_apps_target = models.PositiveIntegerField("monthly apps target", default=0)
    monthly_premium_target = models.DecimalField(
        "monthly premium target",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0"),
    )
    premium_mode = models.CharField(
        "premium mode",
        max_length=10,
        choices=PremiumMode.choices,
        default=PremiumMode.BUCKET,
        editable=False,
    )

    DERIVED_FIELDS = ("premium_mode", "monthly_apps_target", "monthly_premium_target")

    class Meta:
        verbose_name = "role expectation"
        verbose_name_plural = "role expectations"

    def __str__(self) -> str:
        return f"Expectation for {self.role}"

    def clean(self) -> None:
        from benchmarks.validators import validate_bucket_breakdown, validate_goal_map

        with _as_model_errors({
            "appGoalsByLob": "app_goals_by_lob",
            "premiumByBucket": "premium_by_bucket",
            "activityTargetsByType": "activity_targets_by_type",
        }):
            self.app_goals_by_lob = validate_goal_map(self.app_goals_by_lob, "appGoalsByLob")
            self.premium_by_bucket = validate_bucket_breakdown(self.premium_by_bucket, "premiumByBucket")
            self.activity_targets_by_type = validate_goal_map(self.activity_targets_by_type, "activityTargetsByType")

    def save(self, *args, **kwargs):
        self.premium_mode = PremiumMode.BUCKET
        self.monthly_apps_target = sum(int(v) for v in (self.app_goals_by_lob or {}).values())
        self.monthly_premium_target = sum(
            (Decimal(str(v)) for v in (self.premium_by_bucket or {}).values()),
            Decimal("0"),
        )
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = {*update_fields, *self.DERIVED_FIELDS}
        super().save(*args, **kwargs)


class PersonOverride(TimeStampedModel):
    """Per-person target overrides. Each field applies on its own; ``None`` = inherit."""

    person = models.OneToOneField(
        "agencies.Person",
        on_delete=models.CASCADE,
        related_name="benchmark_override",
    )
    monthly_apps_override = models.PositiveIntegerField("monthly apps", null=True, blank=True)
    monthly_premium_override = models.DecimalField(
        "monthly premium",
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
    )
    premium_mode_override = models.CharField(
        "premium mode",
        max_length=10,
        choices=PremiumMode.choices,
        null=True,
        blank=True,
    )
    premium_by_lob_override = models.JSONField(
        "premium by LOB",
        null=True,
        blank=True,
        help_text='[{"lobId": "...", "premium": ...}]',
    )
    premium_by_bucket_override = models.JSONField("premium by bucket", null=True, blank=True)
    app_goals_by_lob_override = models.JSONField(
        "app goals by LOB",
        null=True,
        blank=True,
        help_text="Merged over the role's app goals, LOB by LOB.",
    )
    activity_targets_by_type_override = models.JSONField("activity targets by type", null=True, blank=True)

    OVERRIDE_FIELDS = (
        "monthly_apps_override",
        "monthly_premium_override",
        "premium_mode_override",
        "premium_by_lob_override",
        "premium_by_bucket_override",
        "app_goals_by_lob_override",
        "activity_targets_by_type_override",
    )

    class Meta:
        verbose_name = "person override"
        verbose_name_plural = "person overrides"

    def __str__(self) -> str:
        return f"Override for {self.person}"

    def clean(self) -> None:
        from benchmarks.validators import validate_goal_map, validate_optional_premium_targets

        known_lob_ids = None
        if self.person_id:
            known_lob_ids = {str(pk) for pk in self.person.organization.lines_of_business.values_list("pk", flat=True)}
        with _as_model_errors({
            "premiumModeOverride": "premium_mode_override",
            "premiumByLobOverride": "premium_by_lob_override",
            "premiumByBucketOverride": "premium_by_bucket_override",
            "appGoalsByLobOverride": "app_goals_by_lob_override",
            "activityTargetsByTypeOverride": "activity_targets_by_type_override",
        }):
            targets = validate_optional_premium_targets(
                self.premium_mode_override,
                self.premium_by_lob_override,
                self.premium_by_bucket_override,
                known_lob_ids=known_lob_ids,
            )
            if self.app_goals_by_lob_override is not None:
                self.app_goals_by_lob_override = validate_goal_map(
                    self.app_goals_by_lob_override, "appGoalsByLobOverride"
                )
            if self.activity_targets_by_type_override is not None:
                self.activity_targets_by_type_override = validate_goal_map(
                    self.activity_targets_by_type_override, "activityTargetsByTypeOverride"
                )
        self.premium_mode_override = targets.premium_mode
        self.premium_by_lob_override = targets.premium_by_lob
        self.premium_by_bucket_override = targets.premium_by_bucket

    @property
    def has_any_override(self) -> bool:
        return any(getattr(self, name) is not None for name in self.OVERRIDE_FIELDS)


class ReportSnapshot(TimeStampedModel):
    """A computed report payload frozen for later reading. Never recomputed."""

    class ReportType(models.TextChoices):
        BENCHMARKS = "benchmarks", "Benchmarks"

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="report_snapshots",
    )
    report_type = models.CharField(
        "report type",
        max_length=30,
        choices=ReportType.choices,
        default=ReportType.BENCHMARKS,
    )
    title = models.CharField("title", max_length=140)
    start_iso = models.CharField("start", max_length=10)
    end_iso = models.CharField("end", max_length=10)
    statuses_csv = models.CharField("statuses", max_length=200)
    payload = models.JSONField("payload", default=dict)
    meta = models.JSONField("meta", default=dict)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="report_snapshots",
    )

    class Meta:
        verbose_name = "report snapshot"
        verbose_name_plural = "report snapshots"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["organization", "-created_at"], name="idx_snapshot_org_created"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def statuses(self) -> list[str]:
        return [s for s in self.statuses_csv.split(",") if s]
