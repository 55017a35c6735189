from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from core.exceptions import NotFoundError, OverlapError, ValidationError
from roi import services
from roi.models import CommissionRate, MonthlyManualInput


@pytest.mark.django_db
class TestSaveCommissionRate:
    def test_rejects_rate_above_one_with_hint(self, organization):
        with pytest.raises(ValidationError) as excinfo:
            services.save_commission_rate(
                organization=organization, lob="Auto", rate="8", effective_start="2024-01-01"
            )
        assert excinfo.value.field == "rate"
        assert "0.08" in excinfo.value.message

    def test_rejects_unknown_lob(self, organization):
        with pytest.raises(ValidationError) as excinfo:
            services.save_commission_rate(
                organization=organization, lob="Boats", rate="0.1", effective_start="2024-01-01"
            )
        assert excinfo.value.field == "lob"

    def test_same_start_updates_in_place(self, organization):
        services.save_commission_rate(organization=organization, lob="Fire", rate="0.1", effective_start="2024-01-01")
        services.save_commission_rate(organization=organization, lob="Fire", rate="0.12", effective_start="2024-01-01")

        rates = CommissionRate.objects.filter(organization=organization, lob="Fire")
        assert rates.count() == 1
        assert rates.get().rate == Decimal("0.12")

    def test_overlap_in_same_scope_is_refused(self, organization):
        services.save_commission_rate(organization=organization, lob="Life", rate="0.1", effective_start="2024-01-01")
        with pytest.raises(OverlapError):
            services.save_commission_rate(
                organization=organization, lob="Life", rate="0.2", effective_start="2024-06-01"
            )
        assert CommissionRate.objects.filter(organization=organization, lob="Life").count() == 1

    def test_concurrent_insert_with_same_start_is_an_overlap(self, organization):
        services.save_commission_rate(organization=organization, lob="Auto", rate="0.1", effective_start="2024-01-01")

        # A writer that read the scope before the first insert committed.
        with patch("roi.services.validate_no_overlap", return_value=None):
            with pytest.raises(OverlapError):
                services.save_commission_rate(
                    organization=organization, lob="Auto", rate="0.2", effective_start="2024-01-01"
                )

        assert CommissionRate.objects.get(organization=organization, lob="Auto").rate == Decimal("0.1")

    def test_full_clean_refuses_overlapping_period(self, organization):
        services.save_commission_rate(organization=organization, lob="Life", rate="0.1", effective_start="2024-01-01")
        rate = CommissionRate(
            organization=organization, lob="Life", rate=Decimal("0.2"), effective_start=date(2024, 6, 1)
        )

        with pytest.raises(DjangoValidationError) as excinfo:
            rate.full_clean()

        assert "effective_start" in excinfo.value.message_dict

    def test_other_lob_is_another_scope(self, organization):
        services.save_commission_rate(organization=organization, lob="Life", rate="0.1", effective_start="2024-01-01")
        services.save_commission_rate(organization=organization, lob="Health", rate="0.1", effective_start="2024-01-01")
        assert CommissionRate.objects.filter(organization=organization).count() == 2

    def test_closing_a_period_then_adding_the_next(self, organization):
        services.save_commission_rate(organization=organization, lob="IPS", rate="0.1", effective_start="2024-01-01")
        services.save_commission_rate(
            organization=organization, lob="IPS", rate="0.1", effective_start="2024-01-01", effective_end="2024-05-31"
        )
        services.save_commission_rate(organization=organization, lob="IPS", rate="0.2", effective_start="2024-06-01")

        assert [r.rate for r in services.active_rates(organization, date(2024, 7, 1))] == [Decimal("0.2")]


@pytest.mark.django_db
def test_active_rates_lists_one_rate_per_lob_in_canonical_order(organization):
    services.save_commission_rate(organization=organization, lob="Life", rate="0.03", effective_start="2024-01-01")
    services.save_commission_rate(organization=organization, lob="Auto", rate="0.08", effective_start="2024-01-01")

    rates = services.active_rates(organization, date(2024, 2, 1))

    assert [r.lob for r in rates] == ["Auto", "Life"]


@pytest.mark.django_db
def test_monthly_input_upsert_is_idempotent(organization, person):
    for _ in range(2):
        services.upsert_monthly_input(
            organization=organization,
            person_id=person.pk,
            month="2024-03",
            commission_paid="120.50",
            marketing_expenses="30",
        )

    record = MonthlyManualInput.objects.get(organization=organization, person=person, month="2024-03")
    assert record.commission_paid == Decimal("120.50")
    assert record.lead_spend is None
    assert MonthlyManualInput.objects.count() == 1


@pytest.mark.django_db
def test_monthly_input_requires_valid_month_and_amounts(organization, person):
    with pytest.raises(ValidationError) as excinfo:
        services.upsert_monthly_input(organization=organization, person_id=person.pk, month="03-2024", commission_paid=1)
    assert excinfo.value.field == "month"

    with pytest.raises(ValidationError) as excinfo:
        services.upsert_monthly_input(
            organization=organization, person_id=person.pk, month="2024-03", commission_paid="-5"
        )
    assert excinfo.value.field == "commission_paid"


@pytest.mark.django_db
def test_comp_plan_for_person_of_other_org_is_not_found(other_organization, person):
    with pytest.raises(NotFoundError):
        services.save_compensation_plan(
            organization=other_organization,
            person_id=person.pk,
            monthly_salary="1000",
            effective_start="2024-01-01",
        )


def test_scope_lock_key_is_stable_and_scoped():
    key = services.scope_lock_key(CommissionRate, ("org-1", "Auto"))
    assert key == services.scope_lock_key(CommissionRate, ("org-1", "Auto"))
    assert key != services.scope_lock_key(CommissionRate, ("org-1", "Fire"))
    assert 0 <= key < 2**31
