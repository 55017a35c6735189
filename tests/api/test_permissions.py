import pytest

from accounts.models import User
from api.v1.permissions import CanManageSnapshots, CanViewReports, CanWriteBenchmarks, CanWriteRoi, HasOrganization


class DummyView:
    pass


class DummyRequest:
    def __init__(self, user, method="GET", query_params=None, data=None):
        self.user = user
        self.method = method
        self.query_params = query_params or {}
        self.data = data or {}


@pytest.mark.django_db
def test_has_organization_requires_a_membership(organization):
    loner = User.objects.create_user(email="loner@test.com", password="testpass123")

    assert HasOrganization().has_permission(DummyRequest(loner), DummyView()) is False


@pytest.mark.django_db
def test_members_cannot_read_reports(member_user):
    request = DummyRequest(member_user)

    assert HasOrganization().has_permission(request, DummyView()) is True
    assert CanViewReports().has_permission(request, DummyView()) is False


@pytest.mark.django_db
@pytest.mark.parametrize("permission_class", [CanWriteRoi, CanWriteBenchmarks, CanManageSnapshots])
def test_managers_read_setup_but_only_write_snapshots(manager_user, permission_class):
    permission = permission_class()

    assert permission.has_permission(DummyRequest(manager_user, method="GET"), DummyView()) is True
    can_write = permission.has_permission(DummyRequest(manager_user, method="POST"), DummyView())
    assert can_write is (permission_class is CanManageSnapshots)


@pytest.mark.django_db
@pytest.mark.parametrize("permission_class", [CanWriteRoi, CanWriteBenchmarks, CanManageSnapshots])
def test_owners_and_admins_write_everything(owner_user, admin_user, permission_class):
    for user in (owner_user, admin_user):
        assert permission_class().has_permission(DummyRequest(user, method="POST"), DummyView()) is True


@pytest.mark.django_db
def test_write_on_another_organization_is_denied(owner_user, other_organization):
    request = DummyRequest(owner_user, method="POST", data={"org": str(other_organization.pk)})

    assert CanWriteRoi().has_permission(request, DummyView()) is False
