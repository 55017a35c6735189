from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from accounts.models import User
from agencies.models import LineOfBusiness, Organization, OrgMembership, OrgRole, Person
from production.models import PolicyStatus, SaleEvent


@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Agency Test", code="AG-TEST")


@pytest.fixture
def other_organization(db):
    return Organization.objects.create(name="Other Agency", code="AG-OTHER")


def _user_with_membership(email, organization, role, capabilities=None):
    user = User.objects.create_user(
        email=email,
        password="testpass123",
        first_name=role.title(),
        last_name="User",
    )
    OrgMembership.objects.create(
        organization=organization,
        user=user,
        role=role,
        is_default=True,
        capabilities=capabilities or [],
    )
    return user


@pytest.fixture
def owner_user(organization):
    return _user_with_membership("owner@test.com", organization, OrgMembership.Role.OWNER)


@pytest.fixture
def admin_user(organization):
    return _user_with_membership("admin@test.com", organization, OrgMembership.Role.ADMIN)


@pytest.fixture
def manager_user(organization):
    return _user_with_membership("manager@test.com", organization, OrgMembership.Role.MANAGER)


@pytest.fixture
def member_user(organization):
    return _user_with_membership("member@test.com", organization, OrgMembership.Role.MEMBER)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(api_client, owner_user):
    api_client.force_authenticate(user=owner_user)
    return api_client


@pytest.fixture
def role(organization):
    return OrgRole.objects.create(organization=organization, name="Account Manager")


@pytest.fixture
def person(organization, role):
    return Person.objects.create(organization=organization, full_name="Alice Agent", role=role)


@pytest.fixture
def other_person(organization, role):
    return Person.objects.create(organization=organization, full_name="Bob Broker", role=role)


@pytest.fixture
def lob_auto(organization):
    return LineOfBusiness.objects.create(
        organization=organization,
        name="Auto",
        premium_category=LineOfBusiness.PremiumCategory.PC,
    )


@pytest.fixture
def lob_life(organization):
    return LineOfBusiness.objects.create(
        organization=organization,
        name="Life",
        premium_category=LineOfBusiness.PremiumCategory.FS,
    )


@pytest.fixture
def make_sale(organization):
    def _make(person, premium, date_sold, *, lob=None, lob_name="", status=PolicyStatus.WRITTEN):
        return SaleEvent.objects.create(
            organization=organization,
            person=person,
            line_of_business=lob,
            lob_name=lob_name or (lob.name if lob is not None else ""),
            premium=Decimal(str(premium)),
            date_sold=date_sold if isinstance(date_sold, date) else date.fromisoformat(date_sold),
            status=status,
        )
    return _make
