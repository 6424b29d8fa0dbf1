"""Mapping of domain and framework errors to the JSON error envelope.

Every error response has the shape
``{"error": {"code": "...", "message": "..."}}``.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from cinema.domain.errors import CapacityExceededError, DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TARGET: status.HTTP_400_BAD_REQUEST,
    ErrorCode.HALL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CAPACITY_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.CONFLICT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_body(code: str, message: str, **extra) -> dict:
    return {"error": {"code": code, "message": message, **extra}}


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        field, value = next(iter(detail.items()))
        message = _first_message(value)
        return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_message(detail[0])
    return str(detail)


def domain_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER that understands DomainError."""
    if isinstance(exc, DomainError):
        extra = {}
        if isinstance(exc, CapacityExceededError):
            extra = {
                "sessionId": exc.session_id,
                "remaining": exc.remaining,
                "shortfall": exc.shortfall,
            }
        return Response(
            error_body(exc.code.value, exc.message, **extra),
            status=STATUS_BY_CODE[exc.code],
        )

    if isinstance(exc, ValidationError):
        return Response(
            error_body(ErrorCode.INVALID_INPUT.value, _first_message(exc.detail)),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, APIException):
        code = exc.get_codes()
        code = code.upper() if isinstance(code, str) else "ERROR"
        response.data = error_body(code, _first_message(exc.detail))
    elif response is None:
        logger.exception("Unhandled error in %s", context.get("view").__class__.__name__)
    return response
