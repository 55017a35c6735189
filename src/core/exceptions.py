"""Domain errors and the DRF exception handler that renders them.

Services raise these; API views let them propagate and ``api_exception_handler``
turns them into ``{"error": ..., "field": ...}`` responses.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger("salesroi")


class DomainError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_field: str | None = None

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field if field is not None else self.default_field

    def as_dict(self) -> dict:
        payload = {"error": self.message}
        if self.field:
            payload["field"] = self.field
        return payload


class ValidationError(DomainError):
    """Malformed or out-of-range input, tagged with the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, field=field)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class OverlapError(DomainError):
    """An effective-dated interval collides with another one in the same scope."""

    status_code = status.HTTP_409_CONFLICT
    default_field = "effective_start"

    def __init__(self, message: str = "Overlaps an existing effective period.", *, conflicting=None) -> None:
        super().__init__(message)
        self.conflicting = conflicting


class NotFoundError(DomainError):
    """A referenced record does not exist inside the requesting organization."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, field: str, message: str = "Not found.") -> None:
        super().__init__(message, field=field)


def api_exception_handler(exc, context):
    """REST_FRAMEWORK["EXCEPTION_HANDLER"] entry point."""
    if isinstance(exc, DomainError):
        return Response(exc.as_dict(), status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled API error in %s",
        view.__class__.__name__ if view is not None else "unknown view",
    )
    payload = {"error": "Internal error"}
    if settings.DEBUG:
        payload["detail"] = f"{exc.__class__.__name__}: {exc}"
    return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
