import pytest
from django.core.management import call_command

from agencies.models import Organization, Person
from benchmarks.models import RoleExpectation
from production.models import SaleEvent
from roi.models import CommissionRate


@pytest.mark.django_db
def test_seed_data_is_idempotent():
    call_command("seed_data", "--months", "1")
    sales = SaleEvent.objects.count()
    call_command("seed_data", "--months", "1")

    organization = Organization.objects.get(code="DEMO")
    assert Person.objects.filter(organization=organization).count() == 3
    assert CommissionRate.objects.filter(organization=organization).count() == 5
    assert RoleExpectation.objects.filter(role__organization=organization).count() == 2
    assert sales > 0
    assert SaleEvent.objects.count() == sales


@pytest.mark.django_db
def test_seed_data_flush_recreates_demo_org():
    call_command("seed_data", "--months", "1")
    first = Organization.objects.get(code="DEMO").pk

    call_command("seed_data", "--flush", "--months", "1")

    assert Organization.objects.get(code="DEMO").pk != first
