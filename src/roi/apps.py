"""App config for the roi module."""
from django.apps import AppConfig


class RoiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "roi"
    verbose_name = "ROI"
