"""Django admin configuration for the production app."""
from django.contrib import admin

from production.models import SaleEvent


@admin.register(SaleEvent)
class SaleEventAdmin(admin.ModelAdmin):
    list_display = ("date_sold", "person", "lob_display", "premium", "status", "policy_number", "organization")
    list_filter = ("status", "organization", "line_of_business")
    search_fields = ("person__full_name", "policy_number", "lob_name")
    date_hierarchy = "date_sold"
    list_select_related = ("person", "organization", "line_of_business")
    readonly_fields = ("id", "created_at", "updated_at")
    list_per_page = 100
