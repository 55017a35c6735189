import pytest

from agencies.models import OrgMembership, Person
from benchmarks import services as benchmark_services


def _unwrap_results(payload):
    if isinstance(payload, dict) and "results" in payload:
        return payload["results"]
    return payload


@pytest.mark.django_db
def test_people_list_only_shows_own_organization(owner_client, person, other_organization):
    Person.objects.create(organization=other_organization, full_name="Outsider")

    response = owner_client.get("/api/v1/people/")

    assert response.status_code == 200
    assert [p["fullName"] for p in _unwrap_results(response.json())] == ["Alice Agent"]


@pytest.mark.django_db
def test_people_search_and_filters(owner_client, person, other_person):
    other_person.is_active = False
    other_person.save()

    by_name = owner_client.get("/api/v1/people/", {"search": "bob"})
    active = owner_client.get("/api/v1/people/", {"is_active": "true"})

    assert [p["fullName"] for p in _unwrap_results(by_name.json())] == ["Bob Broker"]
    assert [p["fullName"] for p in _unwrap_results(active.json())] == ["Alice Agent"]


@pytest.mark.django_db
def test_roles_and_lines_of_business(owner_client, role, lob_auto, lob_life):
    benchmark_services.save_role_expectation(
        organization=role.organization,
        role_id=role.pk,
        premium_by_bucket={"PC": 1, "FS": 1},
    )

    roles = _unwrap_results(owner_client.get("/api/v1/roles/").json())
    lobs = _unwrap_results(owner_client.get("/api/v1/lines-of-business/", {"premium_category": "FS"}).json())

    assert roles == [{"id": str(role.pk), "name": "Account Manager", "hasExpectation": True}]
    assert [lob["name"] for lob in lobs] == ["Life"]


@pytest.mark.django_db
def test_org_parameter_switches_organization(owner_client, owner_user, other_organization):
    OrgMembership.objects.create(organization=other_organization, user=owner_user, role=OrgMembership.Role.ADMIN)
    Person.objects.create(organization=other_organization, full_name="Outsider")

    response = owner_client.get("/api/v1/people/", {"org": str(other_organization.pk)})

    assert [p["fullName"] for p in _unwrap_results(response.json())] == ["Outsider"]


@pytest.mark.django_db
def test_person_report_for_another_organization_is_not_found(owner_client, other_organization):
    outsider = Person.objects.create(organization=other_organization, full_name="Outsider")

    response = owner_client.post(
        "/api/v1/reports/roi/person/", {"personId": str(outsider.pk)}, format="json",
    )

    assert response.status_code == 404
    assert response.json()["field"] == "person_id"


@pytest.mark.django_db
def test_snapshot_of_another_organization_is_not_found(owner_client, other_organization):
    snapshot = benchmark_services.create_benchmarks_snapshot(
        organization=other_organization, start_iso="2024-01-01", end_iso="2024-01-31", payload={},
    )

    response = owner_client.get(f"/api/v1/reports/snapshots/{snapshot.pk}/")

    assert response.status_code == 404
