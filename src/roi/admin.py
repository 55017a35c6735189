"""Django admin configuration for the ROI app.

Interval models validate overlap through ``EffectiveIntervalModel.clean()``,
which the admin form runs before saving.
"""
from django.contrib import admin

from roi.models import CommissionRate, CompensationPlan, ExternalMonthlyResult, MonthlyManualInput


@admin.register(CommissionRate)
class CommissionRateAdmin(admin.ModelAdmin):
    list_display = ("organization", "lob", "rate", "effective_start", "effective_end")
    list_filter = ("lob", "organization")
    search_fields = ("organization__name",)
    list_select_related = ("organization",)
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(CompensationPlan)
class CompensationPlanAdmin(admin.ModelAdmin):
    list_display = ("person", "label", "monthly_salary", "effective_start", "effective_end", "organization")
    list_filter = ("organization",)
    search_fields = ("person__full_name", "label")
    list_select_related = ("person", "organization")
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(MonthlyManualInput)
class MonthlyManualInputAdmin(admin.ModelAdmin):
    list_display = (
        "month",
        "person",
        "commission_paid",
        "lead_spend",
        "other_bonuses_manual",
        "marketing_expenses",
        "organization",
    )
    list_filter = ("month", "organization")
    search_fields = ("person__full_name", "notes")
    list_select_related = ("person", "organization")
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(ExternalMonthlyResult)
class ExternalMonthlyResultAdmin(admin.ModelAdmin):
    list_display = ("month", "person", "total_earnings", "source", "organization")
    list_filter = ("month", "source")
    search_fields = ("person__full_name",)
    list_select_related = ("person", "organization")
    readonly_fields = ("id", "created_at", "updated_at")
