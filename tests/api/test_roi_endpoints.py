from datetime import date
from decimal import Decimal

import pytest
from django.utils import timezone

from roi.models import CommissionRate, CompensationPlan, MonthlyManualInput


@pytest.fixture
def manager_client(api_client, manager_user):
    api_client.force_authenticate(user=manager_user)
    return api_client


@pytest.mark.django_db
class TestRoiSetupEndpoints:
    def test_owner_creates_rate(self, owner_client, organization):
        response = owner_client.post(
            "/api/v1/roi/rates/",
            {"lob": "Auto", "rate": "0.08", "effectiveStart": "2024-01-01"},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["rate"]["effectiveEnd"] is None
        assert CommissionRate.objects.get(organization=organization).rate == Decimal("0.08")

    def test_invalid_rate_reports_field(self, owner_client):
        response = owner_client.post(
            "/api/v1/roi/rates/",
            {"lob": "Auto", "rate": "8", "effectiveStart": "2024-01-01"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["field"] == "rate"

    def test_overlapping_rate_is_a_conflict(self, owner_client):
        owner_client.post("/api/v1/roi/rates/", {"lob": "Life", "rate": "0.5", "effectiveStart": "2024-01-01"}, format="json")

        response = owner_client.post(
            "/api/v1/roi/rates/",
            {"lob": "Life", "rate": "0.4", "effectiveStart": "2024-03-01", "effectiveEnd": "2024-04-30"},
            format="json",
        )

        assert response.status_code == 409

    def test_active_rates_listing(self, owner_client):
        owner_client.post("/api/v1/roi/rates/", {"lob": "Fire", "rate": "0.1", "effectiveStart": "2024-01-01"}, format="json")
        owner_client.post("/api/v1/roi/rates/", {"lob": "Auto", "rate": "0.08", "effectiveStart": "2025-01-01"}, format="json")

        response = owner_client.get("/api/v1/roi/rates/", {"active_on": "2024-06-01"})

        assert [r["lob"] for r in response.json()["rates"]] == ["Fire"]

    def test_manager_reads_but_cannot_write(self, manager_client):
        assert manager_client.get("/api/v1/roi/comp-plans/").status_code == 200

        response = manager_client.post(
            "/api/v1/roi/rates/", {"lob": "Auto", "rate": "0.08", "effectiveStart": "2024-01-01"}, format="json",
        )

        assert response.status_code == 403
        assert not CommissionRate.objects.exists()

    def test_member_cannot_read(self, api_client, member_user):
        api_client.force_authenticate(user=member_user)

        assert api_client.get("/api/v1/roi/rates/").status_code == 403

    def test_comp_plan_and_monthly_input(self, owner_client, person):
        plan = owner_client.post(
            "/api/v1/roi/comp-plans/",
            {"personId": str(person.pk), "monthlySalary": "3000", "effectiveStart": "2024-01-01", "label": "Base"},
            format="json",
        )
        first = owner_client.post(
            "/api/v1/roi/monthly-inputs/",
            {"personId": str(person.pk), "month": "2024-01", "commissionPaid": "100"},
            format="json",
        )
        second = owner_client.post(
            "/api/v1/roi/monthly-inputs/",
            {"personId": str(person.pk), "month": "2024-01", "commissionPaid": "150", "notes": "fixed"},
            format="json",
        )
        listed = owner_client.get("/api/v1/roi/monthly-inputs/", {"month": "2024-01"})

        assert plan.json()["plan"]["personName"] == "Alice Agent"
        assert CompensationPlan.objects.count() == 1
        assert first.json()["input"]["id"] == second.json()["input"]["id"]
        assert MonthlyManualInput.objects.get().notes == "fixed"
        assert [row["commissionPaid"] for row in listed.json()["inputs"]] == [150]

    def test_bad_month_is_rejected(self, owner_client, person):
        response = owner_client.post(
            "/api/v1/roi/monthly-inputs/",
            {"personId": str(person.pk), "month": "2024-13", "commissionPaid": "1"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["field"] == "month"


@pytest.mark.django_db
class TestRoiReports:
    def test_person_report_current_month(self, owner_client, organization, person, make_sale):
        owner_client.post("/api/v1/roi/rates/", {"lob": "Auto", "rate": "0.1", "effectiveStart": "2020-01-01"}, format="json")
        make_sale(person, "1000", timezone.localdate(), lob_name="Personal Auto")

        response = owner_client.post(
            "/api/v1/reports/roi/person/", {"personId": str(person.pk), "monthsBack": 1}, format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["personName"] == "Alice Agent"
        [month] = body["months"]
        assert month["month"] == timezone.localdate().strftime("%Y-%m")
        assert month["apps"] == 1
        assert month["revenue"] == 100.0
        assert month["roiPercent"] == 0.0

    def test_person_report_requires_person(self, owner_client):
        response = owner_client.post("/api/v1/reports/roi/person/", {}, format="json")

        assert response.status_code == 400
        assert response.json() == {"error": "personId is required.", "field": "personId"}

    def test_summary_totals_are_the_sum_of_people(self, owner_client, person, other_person, make_sale):
        owner_client.post("/api/v1/roi/rates/", {"lob": "Auto", "rate": "0.1", "effectiveStart": "2024-01-01"}, format="json")
        make_sale(person, "1000", date(2024, 1, 5), lob_name="Auto")
        make_sale(other_person, "500", date(2024, 2, 5), lob_name="Auto")

        response = owner_client.post(
            "/api/v1/reports/roi/", {"startMonth": "2024-01", "endMonth": "2024-02"}, format="json",
        )

        body = response.json()
        assert (body["startMonth"], body["endMonth"]) == ("2024-01", "2024-02")
        assert [p["personName"] for p in body["people"]] == ["Alice Agent", "Bob Broker"]
        assert body["totals"]["revenue"] == 150.0
        assert body["totals"]["premium"] == sum(p["premium"] for p in body["people"])
