from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import code_for_status, error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = "Something went wrong"


class ApiError(Exception):
    """
    Business-rule failure carrying the HTTP status the caller should answer with.

    Services raise it at the point of detection; the HTTP layer renders
    ``status_code`` and ``message`` verbatim.

    Args:
        status_code: HTTP status (400, 404, 500 in the cart domain).
        message: Human readable explanation of the error.
        code: Optional machine readable code; derived from the status if omitted.
        details: Optional structured details for clients.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = int(status_code)
        self.message = message
        self.code = code or code_for_status(self.status_code)
        self.details = details
        self.headers = headers

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r})"

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            headers=self.headers,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render every exception raised under DRF as the standard error envelope."""

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApiError):
        bound_logger.info(
            "Handled api error",
            code=exc.code,
            status=exc.status_code,
        )
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_normalize_django_validation_error(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        SERVER_ERROR_MESSAGE,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    code, message, details = _normalize_payload(exc, response.data, status_code)
    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)
    return error_response(code, message, details, http_status=status_code)


def _normalize_django_validation_error(
    exc: DjangoValidationError,
) -> Union[Dict[str, Any], list]:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, ValidationError):
        return "VALIDATION_ERROR", _extract_message(payload, "Validation failed", status_code), payload
    if isinstance(exc, ParseError):
        return "VALIDATION_ERROR", _extract_message(payload, "Malformed request", status_code), None
    if isinstance(exc, (NotFound, Http404)):
        return "NOT_FOUND", _extract_message(payload, "Resource not found", status_code), None
    if isinstance(exc, MethodNotAllowed):
        return "METHOD_NOT_ALLOWED", _extract_message(payload, "Method not allowed", status_code), None
    return (
        code_for_status(status_code),
        _extract_message(payload, "Request failed", status_code),
        None,
    )


def _extract_message(payload: Any, fallback: str, status_code: int) -> str:
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = ["ApiError", "global_exception_handler"]
