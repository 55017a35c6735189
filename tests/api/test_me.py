import pytest


@pytest.mark.django_db
def test_me_returns_viewer_context(owner_client, organization):
    response = owner_client.get("/api/v1/auth/me/")

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "owner@test.com"
    assert body["organization"] == {"id": str(organization.pk), "name": "Agency Test", "code": "AG-TEST"}
    assert body["role"] == "OWNER"
    assert body["canViewReports"] is True
    assert "CAN_WRITE_ROI" in body["capabilities"]


@pytest.mark.django_db
def test_anonymous_requests_are_rejected(api_client):
    response = api_client.get("/api/v1/auth/me/")

    assert response.status_code in (401, 403)


@pytest.mark.django_db
def test_api_responses_are_not_cached(owner_client):
    response = owner_client.get("/api/v1/auth/me/")

    assert "no-store" in response["Cache-Control"]
    assert response["Pragma"] == "no-cache"
