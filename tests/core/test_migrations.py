from io import StringIO

import pytest
from django.core.management import call_command
from django.test import override_settings

PROJECT_APPS = ("accounts", "agencies", "production", "roi", "benchmarks")


@pytest.mark.django_db
@override_settings(MIGRATION_MODULES={})
def test_committed_migrations_match_models():
    out = StringIO()

    call_command("makemigrations", *PROJECT_APPS, "--check", "--dry-run", stdout=out)

    assert "No changes detected" in out.getvalue()
