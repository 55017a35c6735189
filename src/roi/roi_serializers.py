"""DRF serializers for the ROI module.

Responses use camelCase keys. Incoming writes are validated by
``roi.services`` so every error has the same ``{error, field}`` shape.
"""
from __future__ import annotations

from rest_framework import serializers

from roi.models import (
    CommissionRate,
    CompensationPlan,
    ExternalMonthlyResult,
    MonthlyManualInput,
)


# ────────────────────────────────────────────────────────────
# Setup records
# ────────────────────────────────────────────────────────────

class CommissionRateSerializer(serializers.ModelSerializer):
    effectiveStart = serializers.DateField(source="effective_start")
    effectiveEnd = serializers.DateField(source="effective_end", allow_null=True)

    class Meta:
        model = CommissionRate
        fields = ["id", "lob", "rate", "effectiveStart", "effectiveEnd"]


class CompensationPlanSerializer(serializers.ModelSerializer):
    personId = serializers.UUIDField(source="person_id")
    personName = serializers.CharField(source="person.full_name")
    monthlySalary = serializers.DecimalField(source="monthly_salary", max_digits=14, decimal_places=2)
    effectiveStart = serializers.DateField(source="effective_start")
    effectiveEnd = serializers.DateField(source="effective_end", allow_null=True)

    class Meta:
        model = CompensationPlan
        fields = ["id", "personId", "personName", "label", "monthlySalary", "effectiveStart", "effectiveEnd"]


class MonthlyManualInputSerializer(serializers.ModelSerializer):
    personId = serializers.UUIDField(source="person_id")
    commissionPaid = serializers.DecimalField(source="commission_paid", max_digits=14, decimal_places=2, allow_null=True)
    leadSpend = serializers.DecimalField(source="lead_spend", max_digits=14, decimal_places=2, allow_null=True)
    otherBonusesManual = serializers.DecimalField(
        source="other_bonuses_manual", max_digits=14, decimal_places=2, allow_null=True
    )
    marketingExpenses = serializers.DecimalField(
        source="marketing_expenses", max_digits=14, decimal_places=2, allow_null=True
    )

    class Meta:
        model = MonthlyManualInput
        fields = [
            "id", "personId", "month", "commissionPaid", "leadSpend",
            "otherBonusesManual", "marketingExpenses", "notes",
        ]


class ExternalMonthlyResultSerializer(serializers.ModelSerializer):
    personId = serializers.UUIDField(source="person_id")
    totalEarnings = serializers.DecimalField(source="total_earnings", max_digits=14, decimal_places=2)

    class Meta:
        model = ExternalMonthlyResult
        fields = ["id", "personId", "month", "totalEarnings", "source"]


# ────────────────────────────────────────────────────────────
# Report rows
# ────────────────────────────────────────────────────────────

class _RoiFiguresSerializer(serializers.Serializer):
    apps = serializers.IntegerField()
    premium = serializers.FloatField()
    revenue = serializers.FloatField()
    salary = serializers.FloatField()
    commissionsPaid = serializers.FloatField(source="commissions_paid")
    commissionPaidFromExternal = serializers.BooleanField(source="commission_paid_from_external")
    leadSpend = serializers.FloatField(source="lead_spend")
    otherBonusesAuto = serializers.FloatField(source="other_bonuses_auto")
    otherBonusesManual = serializers.FloatField(source="other_bonuses_manual")
    marketingExpenses = serializers.FloatField(source="marketing_expenses")
    net = serializers.FloatField()
    roiPercent = serializers.FloatField(source="roi_percent")


class MonthlyResultRowSerializer(_RoiFiguresSerializer):
    month = serializers.CharField()


class PersonRoiTotalsSerializer(_RoiFiguresSerializer):
    personId = serializers.CharField(source="person_id")
    personName = serializers.CharField(source="person_name")
    roleName = serializers.CharField(source="role_name", allow_null=True)


class RoiTotalsSerializer(_RoiFiguresSerializer):
    pass
