# api/exceptions.py

import logging
from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten_detail(detail) -> str:
    """Collapses DRF's nested error detail into one readable line."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = _flatten_detail(value)
            parts.append(message if field in ('detail', 'non_field_errors') else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten_detail(item) for item in detail)
    return str(detail)


def envelope_exception_handler(exc, context):
    """
    Wraps every API error into the {"success": false, "error": ...} envelope
    the dashboard expects.

    Store failures (DatabaseError) are not handled by DRF itself; they are
    logged here and reported as a 500 instead of an HTML error page.
    """
    response = exception_handler(exc, context)

    if response is not None:
        response.data = {
            "success": False,
            "error": _flatten_detail(response.data),
        }
        return response

    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.exception(f"Store failure in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        return Response(
            {"success": False, "error": str(exc) or "Data store unavailable."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return None
