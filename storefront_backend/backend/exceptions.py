# backend/exceptions.py
"""
API ERROR SHAPE

Every error response from the API has the same body:

    {"error": "<message>"}

The storefront frontend reads `error` from failed responses, so framework
errors (malformed JSON, 405, throttling) are reshaped here too.
"""

from __future__ import annotations

import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten(detail) -> str:
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = _flatten(value)
            parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return "; ".join(_flatten(item) for item in detail)
    return str(detail)


def json_error_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled: Django turns it into a 500 and Sentry (if enabled) sees it.
        return None

    data = response.data
    if isinstance(data, dict) and "detail" in data and len(data) == 1:
        message = str(data["detail"])
    else:
        message = _flatten(data)

    view = context.get("view")
    logger.warning(
        "API error response",
        extra={
            "status_code": response.status_code,
            "view": type(view).__name__ if view is not None else None,
        },
    )

    response.data = {"error": message}
    return response
