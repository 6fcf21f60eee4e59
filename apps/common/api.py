"""Common DRF helpers."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


def ok_response(data: Dict[str, Any] | Iterable[Any], status_code: int = status.HTTP_200_OK) -> Response:
    """Return a standardized success envelope."""

    return Response({"ok": True, "data": data}, status=status_code)


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Any = None,
) -> Response:
    """Return a standardized error envelope, with field-level details when given."""

    payload: Dict[str, Any] = {"ok": False, "error": message}
    if details is not None:
        payload["details"] = details
    return Response(payload, status=status_code)


def exception_handler(exc, context):
    """Ensure DRF errors follow the {ok:false,error:...} contract."""

    response = drf_exception_handler(exc, context)
    if response is None:
        return response
    data = response.data
    if isinstance(exc, ValidationError):
        response.data = {"ok": False, "error": "INVALID_PAYLOAD", "details": data}
        return response
    message: Any
    if isinstance(data, dict):
        message = data.get("detail") or data.get("message") or "ERROR"
    else:
        message = "ERROR"
    response.data = {"ok": False, "error": str(message)}
    return response
