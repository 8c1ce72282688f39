from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "BAD_REQUEST": status.HTTP_400_BAD_REQUEST,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Reverse lookup used when an error is raised with a bare status code.
STATUS_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "SERVER_ERROR",
}


def code_for_status(status_code: int) -> str:
    if status_code in STATUS_ERROR_CODES:
        return STATUS_ERROR_CODES[status_code]
    return "SERVER_ERROR" if status_code >= 500 else "UNKNOWN_ERROR"


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Build the error envelope every caller renders:
    ``{"error": {"code", "message", "status", "details"?, "hint"?}}``.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation, passed through verbatim.
        details: Optional context, e.g. serializer errors.
        http_status: Explicit status; otherwise derived from ``code``.
        hint: Optional remediation text for clients.
        headers: Optional response headers.
    """

    if not isinstance(code, str) or not code.strip():
        raise ValueError("error_response requires a non-empty string code")
    if not isinstance(message, str) or not message.strip():
        raise ValueError("error_response requires a non-empty string message")
    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")

    normalized_code = code.strip().upper()
    status_code = (
        int(http_status)
        if http_status is not None
        else ERROR_STATUS_MAP.get(normalized_code, DEFAULT_ERROR_STATUS)
    )
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload: Dict[str, Any] = {
        "error": {
            "code": normalized_code,
            "message": message.strip(),
            "status": status_code,
        }
    }
    if details is not None:
        payload["error"]["details"] = _normalize_details(details)
    if hint is not None:
        payload["error"]["hint"] = hint

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )
    return Response(payload, status=status_code, headers=headers_dict)
