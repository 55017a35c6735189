"""Serializers for organization lookups (people, roles, lines of business)."""
from rest_framework import serializers

from agencies.models import LineOfBusiness, OrgRole, Person


class OrgRoleSerializer(serializers.ModelSerializer):
    hasExpectation = serializers.SerializerMethodField()

    class Meta:
        model = OrgRole
        fields = ["id", "name", "hasExpectation"]

    def get_hasExpectation(self, obj):
        return hasattr(obj, "expectation")


class LineOfBusinessSerializer(serializers.ModelSerializer):
    premiumCategory = serializers.CharField(source="premium_category")

    class Meta:
        model = LineOfBusiness
        fields = ["id", "name", "premiumCategory"]


class PersonSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name")
    roleId = serializers.UUIDField(source="role_id", allow_null=True)
    roleName = serializers.CharField(source="role.name", default=None)
    isActive = serializers.BooleanField(source="is_active")

    class Meta:
        model = Person
        fields = ["id", "fullName", "roleId", "roleName", "isActive"]
