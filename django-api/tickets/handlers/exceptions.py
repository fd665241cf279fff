"""Maps errors to HTTP responses. Never exposes internal details."""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from tickets.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CONCERT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONCERT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SALES_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.QUOTA_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    ErrorCode.PURCHASE_CONFLICT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.HANDLE_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.BUYER_NOT_FOUND: status.HTTP_403_FORBIDDEN,
}

INTERNAL_ERROR_CODE = "INTERNAL"


def error_body(code: str, message: str, **extra) -> dict:
    return {"error": {"code": code, "message": message, **extra}}


def exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER giving every error the same {"error": ...} shape."""
    if isinstance(exc, DomainError):
        response = Response(
            error_body(exc.code.value, exc.message),
            status=ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST),
        )
        if exc.code is ErrorCode.PURCHASE_CONFLICT:
            response["Retry-After"] = "1"
        return response

    response = drf_exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, exceptions.ValidationError):
            response.data = error_body(
                ErrorCode.VALIDATION_ERROR.value, "Invalid input", fields=exc.detail
            )
        elif isinstance(exc, exceptions.APIException):
            response.data = error_body(exc.default_code.upper(), str(exc.detail))
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled error in %s",
        type(view).__name__ if view is not None else "unknown view",
    )
    return Response(
        error_body(INTERNAL_ERROR_CODE, "Internal server error"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
