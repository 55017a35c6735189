"""DRF serializers for benchmarks setup records and snapshots (camelCase output)."""
from __future__ import annotations

from rest_framework import serializers

from benchmarks.models import PersonOverride, ReportSnapshot, RoleExpectation


class RoleExpectationSerializer(serializers.ModelSerializer):
    roleId = serializers.UUIDField(source="role_id")
    roleName = serializers.CharField(source="role.name")
    appGoalsByLob = serializers.JSONField(source="app_goals_by_lob")
    premiumByBucket = serializers.JSONField(source="premium_by_bucket")
    activityTargetsByType = serializers.JSONField(source="activity_targets_by_type")
    monthlyAppsTarget = serializers.IntegerField(source="monthly_apps_target")
    monthlyPremiumTarget = serializers.DecimalField(source="monthly_premium_target", max_digits=14, decimal_places=2)
    premiumMode = serializers.CharField(source="premium_mode")

    class Meta:
        model = RoleExpectation
        fields = [
            "id", "roleId", "roleName", "appGoalsByLob", "premiumByBucket",
            "activityTargetsByType", "monthlyAppsTarget", "monthlyPremiumTarget", "premiumMode",
        ]


class PersonOverrideSerializer(serializers.ModelSerializer):
    personId = serializers.UUIDField(source="person_id")
    personName = serializers.CharField(source="person.full_name")
    monthlyAppsOverride = serializers.IntegerField(source="monthly_apps_override", allow_null=True)
    monthlyPremiumOverride = serializers.DecimalField(
        source="monthly_premium_override", max_digits=14, decimal_places=2, allow_null=True
    )
    premiumModeOverride = serializers.CharField(source="premium_mode_override", allow_null=True)
    premiumByLobOverride = serializers.JSONField(source="premium_by_lob_override", allow_null=True)
    premiumByBucketOverride = serializers.JSONField(source="premium_by_bucket_override", allow_null=True)
    appGoalsByLobOverride = serializers.JSONField(source="app_goals_by_lob_override", allow_null=True)
    activityTargetsByTypeOverride = serializers.JSONField(source="activity_targets_by_type_override", allow_null=True)

    class Meta:
        model = PersonOverride
        fields = [
            "id", "personId", "personName", "monthlyAppsOverride", "monthlyPremiumOverride",
            "premiumModeOverride", "premiumByLobOverride", "premiumByBucketOverride",
            "appGoalsByLobOverride", "activityTargetsByTypeOverride",
        ]


class SnapshotListSerializer(serializers.ModelSerializer):
    reportType = serializers.CharField(source="report_type")
    startISO = serializers.CharField(source="start_iso")
    endISO = serializers.CharField(source="end_iso")
    statuses = serializers.ListField(child=serializers.CharField(), read_only=True)
    createdAt = serializers.DateTimeField(source="created_at")
    createdBy = serializers.EmailField(source="created_by.email", default=None)

    class Meta:
        model = ReportSnapshot
        fields = ["id", "reportType", "title", "startISO", "endISO", "statuses", "createdAt", "createdBy"]


class SnapshotDetailSerializer(SnapshotListSerializer):
    payload = serializers.JSONField()
    meta = serializers.JSONField()

    class Meta(SnapshotListSerializer.Meta):
        fields = SnapshotListSerializer.Meta.fields + ["payload", "meta"]
