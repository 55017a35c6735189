"""Django admin configuration for the benchmarks app."""
from django.contrib import admin

from benchmarks.models import PersonOverride, ReportSnapshot, RoleExpectation


@admin.register(RoleExpectation)
class RoleExpectationAdmin(admin.ModelAdmin):
    list_display = ("role", "monthly_apps_target", "monthly_premium_target", "premium_mode", "updated_at")
    search_fields = ("role__name", "role__organization__name")
    list_select_related = ("role",)
    readonly_fields = ("id", "monthly_apps_target", "monthly_premium_target", "created_at", "updated_at")


@admin.register(PersonOverride)
class PersonOverrideAdmin(admin.ModelAdmin):
    list_display = (
        "person",
        "monthly_apps_override",
        "monthly_premium_override",
        "premium_mode_override",
        "updated_at",
    )
    list_filter = ("premium_mode_override",)
    search_fields = ("person__full_name",)
    list_select_related = ("person",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(ReportSnapshot)
class ReportSnapshotAdmin(admin.ModelAdmin):
    list_display = ("title", "organization", "report_type", "start_iso", "end_iso", "created_by", "created_at")
    list_filter = ("report_type", "organization")
    search_fields = ("title",)
    list_select_related = ("organization", "created_by")
    readonly_fields = (
        "id", "report_type", "start_iso", "end_iso", "statuses_csv",
        "payload", "meta", "created_by", "created_at", "updated_at",
    )
