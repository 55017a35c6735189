"""Resolve a person's monthly targets: person override -> role expectation -> none."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal

from benchmarks.models import PersonOverride, PremiumMode, RoleExpectation

ZERO = Decimal("0")


class ExpectationSource(str, enum.Enum):
    OVERRIDE = "OVERRIDE"
    ROLE = "ROLE"
    NONE = "NONE"


@dataclass(frozen=True)
class PremiumBreakdown:
    mode: str  # PremiumMode
    value: object  # {"PC": .., "FS": .., "IPS"?: ..} or [{"lobId": .., "premium": ..}]

    def weights(self) -> dict[str, Decimal]:
        """Breakdown as ``{key: Decimal}`` (bucket code or LOB id)."""
        if self.mode == PremiumMode.LOB:
            weights: dict[str, Decimal] = {}
            for row in self.value or []:
                weights[row["lobId"]] = weights.get(row["lobId"], ZERO) + Decimal(str(row["premium"]))
            return weights
        return {key: Decimal(str(amount)) for key, amount in (self.value or {}).items()}


@dataclass(frozen=True)
class TargetResolution:
    apps_target: int
    premium_target: Decimal
    premium_breakdown: PremiumBreakdown | None
    source: ExpectationSource
    app_goals_by_lob: dict = field(default_factory=dict)
    activity_targets_by_type: dict = field(default_factory=dict)

    @property
    def premium_mode(self) -> str | None:
        return self.premium_breakdown.mode if self.premium_breakdown else None


def resolve_targets(role_expectation: RoleExpectation | None = None, override: PersonOverride | None = None) -> TargetResolution:
    """Apply the cascade field by field.

    - app goals and activity targets: merged key by key, override first.
    - apps: the override value, else the sum of the merged app goals when
      the override sets any, else the role's derived total, else 0.
    - premium: override value, else the role's derived total, else 0.
    - breakdown: the override's when it names a mode, else the role's
      bucket split, else ``None``.
    - source: OVERRIDE if any override field is set, ROLE if only a role
      expectation exists, NONE otherwise.
    """
    has_override = override is not None and override.has_any_override
    role = role_expectation
    override_goals = (override.app_goals_by_lob_override if has_override else None) or {}
    app_goals = {**((role.app_goals_by_lob if role is not None else None) or {}), **override_goals}
    activities = {
        **((role.activity_targets_by_type if role is not None else None) or {}),
        **((override.activity_targets_by_type_override if has_override else None) or {}),
    }

    if has_override and override.monthly_apps_override is not None:
        apps_target = override.monthly_apps_override
    elif override_goals:
        apps_target = sum(int(goal) for goal in app_goals.values())
    elif role is not None:
        apps_target = role.monthly_apps_target
    else:
        apps_target = 0

    if has_override and override.monthly_premium_override is not None:
        premium_target = Decimal(override.monthly_premium_override)
    elif role is not None:
        premium_target = Decimal(role.monthly_premium_target)
    else:
        premium_target = ZERO

    breakdown = None
    if has_override and override.premium_mode_override:
        mode = override.premium_mode_override
        value = override.premium_by_lob_override if mode == PremiumMode.LOB else override.premium_by_bucket_override
        breakdown = PremiumBreakdown(mode, value)
    elif role is not None:
        breakdown = PremiumBreakdown(PremiumMode.BUCKET, dict(role.premium_by_bucket or {}))

    if has_override:
        source = ExpectationSource.OVERRIDE
    elif role is not None:
        source = ExpectationSource.ROLE
    else:
        source = ExpectationSource.NONE

    return TargetResolution(
        apps_target=int(apps_target),
        premium_target=premium_target,
        premium_breakdown=breakdown,
        source=source,
        app_goals_by_lob=app_goals,
        activity_targets_by_type=activities,
    )


class TargetResolutionService:
    """Bulk-load expectations and overrides of an organization, then resolve per person."""

    def __init__(self, organization_id) -> None:
        self.organization_id = organization_id
        self._roles = {
            exp.role_id: exp
            for exp in RoleExpectation.objects.filter(role__organization_id=organization_id)
        }
        self._overrides = {
            ov.person_id: ov
            for ov in PersonOverride.objects.filter(person__organization_id=organization_id)
        }

    def for_person(self, person) -> TargetResolution:
        role = self._roles.get(person.role_id) if person.role_id else None
        return resolve_targets(role, self._overrides.get(person.pk))
