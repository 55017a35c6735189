import json
import logging
import sys
from unittest.mock import patch

from rest_framework.exceptions import PermissionDenied

from core.exceptions import NotFoundError, OverlapError, ValidationError, api_exception_handler
from core.logging import JSONFormatter


def test_validation_error_renders_field():
    response = api_exception_handler(ValidationError("rate", "rate must be between 0 and 1"), {})

    assert response.status_code == 400
    assert response.data == {"error": "rate must be between 0 and 1", "field": "rate"}


def test_overlap_error_is_a_conflict():
    response = api_exception_handler(OverlapError(), {})

    assert response.status_code == 409
    assert response.data["field"] == "effective_start"


def test_not_found_error():
    response = api_exception_handler(NotFoundError("personId"), {})

    assert response.status_code == 404
    assert response.data == {"error": "Not found.", "field": "personId"}


def test_drf_exceptions_keep_default_rendering():
    response = api_exception_handler(PermissionDenied(), {})

    assert response.status_code == 403
    assert "detail" in response.data


def test_unexpected_errors_become_500(settings):
    settings.DEBUG = False

    with patch("core.exceptions.logger") as logger:
        response = api_exception_handler(RuntimeError("boom"), {"view": None})

    assert response.status_code == 500
    assert response.data == {"error": "Internal error"}
    logger.exception.assert_called_once()


def test_json_formatter_includes_extra_fields_and_exceptions():
    try:
        raise ValueError("bad value")
    except ValueError:
        record = logging.LogRecord(
            "salesroi", logging.ERROR, __file__, 10, "failed for %s", ("org-1",), sys.exc_info(),
        )
    record.organization_id = "org-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "failed for org-1"
    assert payload["level"] == "ERROR"
    assert payload["logger"] == "salesroi"
    assert payload["organization_id"] == "org-1"
    assert payload["exception"]["type"] == "ValueError"
    assert "bad value" in payload["exception"]["traceback"]
