"""Django admin configuration for the agencies app."""
from django.contrib import admin

from agencies.models import LineOfBusiness, Organization, OrgMembership, OrgRole, Person


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code")
    readonly_fields = ("id", "created_at", "updated_at")
    list_per_page = 50


@admin.register(OrgMembership)
class OrgMembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "organization", "role", "person", "is_default", "created_at")
    list_filter = ("role", "is_default", "organization")
    search_fields = ("user__email", "organization__name", "person__full_name")
    list_select_related = ("user", "organization", "person")
    readonly_fields = ("id", "created_at", "updated_at")
    list_per_page = 50


@admin.register(OrgRole)
class OrgRoleAdmin(admin.ModelAdmin):
    list_display = ("name", "organization", "created_at")
    list_filter = ("organization",)
    search_fields = ("name", "organization__name")
    list_select_related = ("organization",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(LineOfBusiness)
class LineOfBusinessAdmin(admin.ModelAdmin):
    list_display = ("name", "organization", "premium_category")
    list_filter = ("premium_category", "organization")
    search_fields = ("name", "organization__name")
    list_select_related = ("organization",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ("full_name", "organization", "role", "is_active", "created_at")
    list_filter = ("is_active", "organization", "role")
    search_fields = ("full_name", "organization__name")
    list_select_related = ("organization", "role")
    readonly_fields = ("id", "created_at", "updated_at")
    list_per_page = 50
