"""Tenancy and org-chart models: organizations, memberships, roles, people, LOBs."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Organization(TimeStampedModel):
    """A sales organization (agency). Every business record is scoped to one."""

    name = models.CharField("name", max_length=255)
    code = models.CharField("code", max_length=50, unique=True)
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "organization"
        verbose_name_plural = "organizations"
        ordering = ["name"]

    def __str__(self):
        return self.name


class OrgMembership(TimeStampedModel):
    """Links a login user to an organization with an access level."""

    class Role(models.TextChoices):
        OWNER = "OWNER", "Owner"
        ADMIN = "ADMIN", "Administrator"
        MANAGER = "MANAGER", "Manager"
        MEMBER = "MEMBER", "Member"

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="org_memberships",
    )
    person = models.ForeignKey(
        "agencies.Person",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="memberships",
        help_text="Salesperson record of this user, if any.",
    )
    role = models.CharField(
        "access level",
        max_length=20,
        choices=Role.choices,
        default=Role.MEMBER,
        db_index=True,
    )
    is_default = models.BooleanField(
        default=False,
        help_text="If True, this organization is used when the request names none.",
    )
    capabilities = models.JSONField(
        "capabilities",
        default=list,
        blank=True,
        help_text="Explicit capability list. Empty = fall back to the access level.",
    )

    class Meta:
        verbose_name = "organization membership"
        verbose_name_plural = "organization memberships"
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "user"],
                name="uniq_membership_org_user",
            ),
        ]

    def __str__(self):
        return f"{self.user} - {self.organization} ({self.role})"

    def get_effective_capabilities(self):
        """Return effective capabilities: explicit if set, else role-based defaults."""
        from agencies.capabilities import ROLE_CAPABILITY_MAP
        if self.capabilities:
            return list(self.capabilities)
        return list(ROLE_CAPABILITY_MAP.get(self.role, []))

    def has_capability(self, capability):
        return capability in self.get_effective_capabilities()


class OrgRole(TimeStampedModel):
    """Job role inside an organization (e.g. "Account Manager"); carries expectations."""

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="roles",
    )
    name = models.CharField("name", max_length=120)

    class Meta:
        verbose_name = "role"
        verbose_name_plural = "roles"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "name"],
                name="uniq_role_name_per_org",
            ),
        ]

    def __str__(self):
        return self.name


class LineOfBusiness(TimeStampedModel):
    """A product line sold by the organization, mapped to a premium bucket."""

    class PremiumCategory(models.TextChoices):
        PC = "PC", "Property & casualty"
        FS = "FS", "Financial services"
        IPS = "IPS", "Investment"

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="lines_of_business",
    )
    name = models.CharField("name", max_length=120)
    premium_category = models.CharField(
        "premium bucket",
        max_length=3,
        choices=PremiumCategory.choices,
        default=PremiumCategory.PC,
    )

    class Meta:
        verbose_name = "line of business"
        verbose_name_plural = "lines of business"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "name"],
                name="uniq_lob_name_per_org",
            ),
        ]

    def __str__(self):
        return self.name


class Person(TimeStampedModel):
    """A salesperson whose production and cost are reported on."""

    organization = models.ForeignKey(
        Organization,
        on_delete=models.CASCADE,
        related_name="people",
    )
    full_name = models.CharField("full name", max_length=255)
    role = models.ForeignKey(
        OrgRole,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="people",
    )
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "person"
        verbose_name_plural = "people"
        ordering = ["full_name"]

    def __str__(self):
        return self.full_name
