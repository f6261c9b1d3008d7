"""Maps domain errors to HTTP responses.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Responses carry the
error code and the user-safe message only; internal details never leave
the process.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError as RequestValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from attendance.domain.errors import (
    ConflictError,
    DomainError,
    ErrorCode,
    NotFoundError,
    RecordValidationError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_CLASS = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def error_body(code: str, message: str, details=None) -> dict:
    body = {"code": code, "message": message}
    if details:
        body["details"] = details
    return {"error": body}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        for error_class, http_status in _STATUS_BY_CLASS:
            if isinstance(exc, error_class):
                break
        else:
            http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
        if http_status >= 500:
            logger.error("Request failed: %s", exc)
        details = exc.details if isinstance(exc, RecordValidationError) else None
        return Response(error_body(exc.code.value, exc.message, details), status=http_status)

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, RequestValidationError):
        response.data = error_body(
            ErrorCode.VALIDATION_FAILED.value, "Invalid request", response.data
        )
    return response
