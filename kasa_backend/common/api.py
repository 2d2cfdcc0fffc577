# common/api.py

"""
API ERROR NORMALIZATION

Every error leaves the API in one envelope:

    {"error": {"code": "...", "message": "...", "details": ...}}

Domain errors (common/exceptions.py) are mapped here so views can simply
call services and let failures propagate.
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from common.exceptions import (
    BusinessValidationError,
    ConflictError,
    InternalServiceError,
    KasaServiceError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BusinessValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InternalServiceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def error_response(*, code: str, message: str, http_status: int, details=None):
    """
    Canonical API error response.
    """
    body = {"code": code, "message": message}
    if details is not None:
        body["details"] = details
    return Response({"error": body}, status=http_status)


def _status_for(exc: KasaServiceError) -> int:
    for error_cls, http_status in STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def exception_handler(exc, context):
    if isinstance(exc, KasaServiceError):
        http_status = _status_for(exc)
        if http_status >= 500:
            logger.exception("Service failure", extra={"view": str(context.get("view"))})
        return error_response(
            code=exc.code,
            message=exc.message or str(exc),
            http_status=http_status,
            details=exc.details,
        )

    # Same conversion DRF applies, done early so the error code survives
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data.keys()) == {"detail"}:
        message, details = str(data["detail"]), None
    else:
        message, details = "Validation error", data

    code = getattr(exc, "default_code", "error")
    response.data = {"error": {"code": code, "message": message}}
    if details is not None:
        response.data["error"]["details"] = details
    return response
