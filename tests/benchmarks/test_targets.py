from decimal import Decimal

import pytest

from benchmarks.models import PersonOverride, PremiumMode, RoleExpectation
from benchmarks.targets import ExpectationSource, TargetResolutionService, resolve_targets


def _role(apps=10, premium_by_bucket=None):
    expectation = RoleExpectation(
        app_goals_by_lob={"Auto": apps},
        premium_by_bucket=premium_by_bucket or {"PC": 1000, "FS": 500},
    )
    expectation.monthly_apps_target = apps
    expectation.monthly_premium_target = sum(Decimal(str(v)) for v in expectation.premium_by_bucket.values())
    return expectation


def test_no_role_and_no_override_resolves_to_nothing():
    resolution = resolve_targets()

    assert resolution.apps_target == 0
    assert resolution.premium_target == 0
    assert resolution.premium_breakdown is None
    assert resolution.source is ExpectationSource.NONE


def test_role_expectation_only():
    resolution = resolve_targets(_role(apps=10))

    assert resolution.apps_target == 10
    assert resolution.premium_target == Decimal("1500")
    assert resolution.premium_mode == PremiumMode.BUCKET
    assert resolution.premium_breakdown.weights() == {"PC": Decimal("1000"), "FS": Decimal("500")}
    assert resolution.source is ExpectationSource.ROLE


def test_apps_override_keeps_role_premium():
    resolution = resolve_targets(_role(apps=10), PersonOverride(monthly_apps_override=15))

    assert resolution.apps_target == 15
    assert resolution.premium_target == Decimal("1500")
    assert resolution.premium_mode == PremiumMode.BUCKET
    assert resolution.source is ExpectationSource.OVERRIDE


def test_lob_breakdown_override_replaces_role_buckets():
    override = PersonOverride(
        premium_mode_override=PremiumMode.LOB,
        premium_by_lob_override=[{"lobId": "a", "premium": 300}, {"lobId": "b", "premium": 200}],
    )

    resolution = resolve_targets(_role(), override)

    assert resolution.premium_mode == PremiumMode.LOB
    assert resolution.premium_breakdown.weights() == {"a": Decimal("300"), "b": Decimal("200")}
    assert resolution.premium_target == Decimal("1500")


def test_empty_override_row_does_not_count_as_override():
    resolution = resolve_targets(_role(), PersonOverride())
    assert resolution.source is ExpectationSource.ROLE


def test_app_goal_override_merges_over_role_goals():
    role = _role(apps=10)
    role.app_goals_by_lob = {"Auto": 10, "Life": 2}
    role.activity_targets_by_type = {"calls": 50, "quotes": 10}
    override = PersonOverride(
        app_goals_by_lob_override={"Life": 5},
        activity_targets_by_type_override={"calls": 80},
    )

    resolution = resolve_targets(role, override)

    assert resolution.app_goals_by_lob == {"Auto": 10, "Life": 5}
    assert resolution.apps_target == 15
    assert resolution.activity_targets_by_type == {"calls": 80, "quotes": 10}
    assert resolution.source is ExpectationSource.OVERRIDE


def test_apps_override_wins_over_app_goal_override():
    override = PersonOverride(monthly_apps_override=3, app_goals_by_lob_override={"Life": 5})

    resolution = resolve_targets(_role(apps=10), override)

    assert resolution.apps_target == 3
    assert resolution.app_goals_by_lob == {"Auto": 10, "Life": 5}


def test_override_without_role():
    resolution = resolve_targets(None, PersonOverride(monthly_premium_override=Decimal("800")))

    assert resolution.apps_target == 0
    assert resolution.premium_target == Decimal("800")
    assert resolution.premium_breakdown is None
    assert resolution.source is ExpectationSource.OVERRIDE


@pytest.mark.django_db
def test_resolution_service_loads_org_expectations(role, person, other_person):
    RoleExpectation.objects.create(role=role, app_goals_by_lob={"Auto": 4, "Life": 2}, premium_by_bucket={"PC": 900, "FS": 100})
    PersonOverride.objects.create(person=other_person, monthly_apps_override=1)

    service = TargetResolutionService(person.organization_id)

    alice = service.for_person(person)
    bob = service.for_person(other_person)
    assert alice.apps_target == 6
    assert alice.premium_target == Decimal("1000")
    assert alice.source is ExpectationSource.ROLE
    assert bob.apps_target == 1
    assert bob.premium_target == Decimal("1000")
    assert bob.source is ExpectationSource.OVERRIDE
