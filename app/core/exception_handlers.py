"""
DRF exception handler for application errors.

Converts core.exceptions.BaseApplicationError (and subclasses raised by
domain apps) into JSON responses with a status code chosen by exception
class. Everything else is delegated to DRF's default handler, so
serializer validation errors, authentication failures and 404s from
get_object() keep DRF's standard format.

Configured in settings:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handlers.api_exception_handler",
    }

Response body:
    {
        "error": "Insufficient account balance",
        "error_code": "INSUFFICIENT_BALANCE",
        "details": {...}
    }
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    BaseApplicationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; first matching class wins
STATUS_BY_EXCEPTION: tuple[tuple[type[BaseApplicationError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: BaseApplicationError) -> int:
    """Return the HTTP status for an application error (400 when unmapped)."""
    for exc_class, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def api_exception_handler(exc, context):
    """Render BaseApplicationError as JSON; defer everything else to DRF."""
    if isinstance(exc, BaseApplicationError):
        status_code = status_for(exc)
        view = context.get("view")
        logger.warning(
            f"{exc.__class__.__name__} in {view.__class__.__name__ if view else 'unknown view'}: "
            f"{exc.error_code}"
        )
        return Response(exc.to_dict(), status=status_code)

    return exception_handler(exc, context)
