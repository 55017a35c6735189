"""Models feeding the ROI rollup: rates, salary plans and monthly cost inputs."""
from __future__ import annotations

import re
from decimal import Decimal

from django.core import exceptions as django_exceptions
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models

from core.exceptions import DomainError
from core.models import TimeStampedModel
from production.lob import CANONICAL_LOBS

MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

month_validator = RegexValidator(MONTH_RE, "Month must be formatted YYYY-MM.")

_money = dict(max_digits=14, decimal_places=2)


class EffectiveIntervalModel(TimeStampedModel):
    """Abstract record valid over ``[effective_start, effective_end]``.

    ``scope_fields`` names the fields whose values form the scope key:
    intervals sharing a scope key must not overlap.

    Business rule enforced in ``clean()`` and in ``roi.services``.
    """

    scope_fields: tuple = ("organization",)

    effective_start = models.DateField("effective from")
    effective_end = models.DateField("effective until", null=True, blank=True)

    class Meta:
        abstract = True
        ordering = ["-effective_start"]

    def scope_filter(self) -> dict:
        return {f"{name}_id" if self._is_fk(name) else name: self._scope_value(name) for name in self.scope_fields}

    def scope_key(self) -> tuple:
        return tuple(str(self._scope_value(name)) for name in self.scope_fields)

    def _is_fk(self, name) -> bool:
        return isinstance(self._meta.get_field(name), models.ForeignKey)

    def _scope_value(self, name):
        return getattr(self, f"{name}_id") if self._is_fk(name) else getattr(self, name)

    def clean(self) -> None:
        from roi.intervals import validate_no_overlap

        if self.effective_start is None or any(v is None for v in self.scope_filter().values()):
            return
        siblings = type(self).objects.filter(**self.scope_filter())
        if self.pk:
            siblings = siblings.exclude(pk=self.pk)
        try:
            validate_no_overlap(siblings, self.effective_start, self.effective_end)
        except DomainError as exc:
            raise django_exceptions.ValidationError({exc.field or "effective_start": exc.message})


class CommissionRate(EffectiveIntervalModel):
    """Share of premium the agency earns on a canonical line of business."""

    scope_fields = ("organization", "lob")

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="commission_rates",
    )
    lob = models.CharField(
        "line of business",
        max_length=20,
        choices=[(lob, lob) for lob in CANONICAL_LOBS],
    )
    rate = models.DecimalField(
        "rate",
        max_digits=7,
        decimal_places=6,
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))],
        help_text="Decimal fraction, e.g. 0.08 for 8%.",
    )

    class Meta:
        verbose_name = "commission rate"
        verbose_name_plural = "commission rates"
        ordering = ["lob", "-effective_start"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "lob", "effective_start"],
                name="uniq_rate_org_lob_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.lob} {self.rate} from {self.effective_start}"


class CompensationPlan(EffectiveIntervalModel):
    """Fixed monthly salary paid to a person. Concurrent plans add up."""

    scope_fields = ("organization", "person")

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="compensation_plans",
    )
    person = models.ForeignKey(
        "agencies.Person",
        on_delete=models.CASCADE,
        related_name="compensation_plans",
    )
    label = models.CharField("label", max_length=120, blank=True)
    monthly_salary = models.DecimalField(
        "monthly salary",
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        **_money,
    )

    class Meta:
        verbose_name = "compensation plan"
        verbose_name_plural = "compensation plans"
        ordering = ["-effective_start"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "person", "effective_start"],
                name="uniq_plan_org_person_start",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.person} {self.monthly_salary}/month from {self.effective_start}"


class MonthlyManualInput(TimeStampedModel):
    """Costs entered by hand for one person and month. Blank amounts count as 0."""

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="monthly_inputs",
    )
    person = models.ForeignKey(
        "agencies.Person",
        on_delete=models.CASCADE,
        related_name="monthly_inputs",
    )
    month = models.CharField("month", max_length=7, validators=[month_validator])  # "YYYY-MM"
    commission_paid = models.DecimalField("commission paid", null=True, blank=True, **_money)
    lead_spend = models.DecimalField("lead spend", null=True, blank=True, **_money)
    other_bonuses_manual = models.DecimalField("other bonuses", null=True, blank=True, **_money)
    marketing_expenses = models.DecimalField("marketing expenses", null=True, blank=True, **_money)
    notes = models.TextField("notes", blank=True)

    class Meta:
        verbose_name = "monthly input"
        verbose_name_plural = "monthly inputs"
        ordering = ["-month"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "person", "month"],
                name="uniq_input_org_person_month",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.person} {self.month}"


class ExternalMonthlyResult(TimeStampedModel):
    """Total earnings computed by the compensation engine for one person and month."""

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="external_results",
    )
    person = models.ForeignKey(
        "agencies.Person",
        on_delete=models.CASCADE,
        related_name="external_results",
    )
    month = models.CharField("month", max_length=7, validators=[month_validator])
    total_earnings = models.DecimalField("total earnings", default=Decimal("0"), **_money)
    source = models.CharField("source", max_length=60, blank=True)

    class Meta:
        verbose_name = "external monthly result"
        verbose_name_plural = "external monthly results"
        ordering = ["-month"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "person", "month"],
                name="uniq_external_org_person_month",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.person} {self.month}: {self.total_earnings}"
