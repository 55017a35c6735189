"""Production facts: one row per policy sold."""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.models import TimeStampedModel


class PolicyStatus(models.TextChoices):
    WRITTEN = "WRITTEN", "Written"
    ISSUED = "ISSUED", "Issued"
    PAID = "PAID", "Paid"
    STATUS_CHECK = "STATUS_CHECK", "Status check"
    CANCELLED = "CANCELLED", "Cancelled"


def counted_statuses():
    """Statuses included in reports when the caller passes none."""
    return list(getattr(
        settings,
        "COUNTED_SALE_STATUSES",
        [PolicyStatus.WRITTEN, PolicyStatus.ISSUED, PolicyStatus.PAID],
    ))


def sanitize_statuses(raw):
    """Keep known statuses from ``raw`` (order preserved, no duplicates).

    Falls back to the counted statuses when nothing valid remains.
    """
    if isinstance(raw, str):
        raw = raw.split(",")
    known = set(PolicyStatus.values)
    cleaned = []
    for value in raw or []:
        value = str(value).strip().upper()
        if value in known and value not in cleaned:
            cleaned.append(value)
    return cleaned or counted_statuses()


class SaleEvent(TimeStampedModel):
    """A policy sold by a person. Written by the upstream sales feed, read-only here."""

    organization = models.ForeignKey(
        "agencies.Organization",
        on_delete=models.CASCADE,
        related_name="sale_events",
    )
    person = models.ForeignKey(
        "agencies.Person",
        on_delete=models.CASCADE,
        related_name="sale_events",
    )
    line_of_business = models.ForeignKey(
        "agencies.LineOfBusiness",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sale_events",
    )
    lob_name = models.CharField(
        "line of business name",
        max_length=120,
        blank=True,
        help_text="Name as received from the feed; used when no LOB record is linked.",
    )
    premium = models.DecimalField(
        "premium",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
    )
    date_sold = models.DateField("date sold", db_index=True)
    status = models.CharField(
        "status",
        max_length=20,
        choices=PolicyStatus.choices,
        default=PolicyStatus.WRITTEN,
    )
    policy_number = models.CharField("policy number", max_length=60, blank=True)

    class Meta:
        verbose_name = "sale event"
        verbose_name_plural = "sale events"
        ordering = ["-date_sold"]
        indexes = [
            models.Index(fields=["organization", "person", "date_sold"], name="idx_sale_org_person_date"),
            models.Index(fields=["organization", "date_sold", "status"], name="idx_sale_org_date_status"),
        ]

    def __str__(self):
        return f"{self.person} {self.lob_display} {self.premium} ({self.date_sold})"

    @property
    def lob_display(self) -> str:
        if self.line_of_business_id:
            return self.line_of_business.name
        return self.lob_name
