# core/api/exception_handler.py

"""
DRF EXCEPTION HANDLER

Views call services and let typed inventory errors escape; this handler turns
them into HTTP responses. Everything else goes through DRF's default handler
(validation errors, auth failures, 404 from get_object, ...).
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    ConflictError,
    InsufficientStockError,
    InvalidInputError,
    InvalidReferenceError,
    InventoryServiceError,
    NotFoundError,
)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientStockError, status.HTTP_400_BAD_REQUEST),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InvalidReferenceError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: InventoryServiceError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def inventory_exception_handler(exc, context):
    if isinstance(exc, InventoryServiceError):
        body = {"detail": str(exc)}
        if isinstance(exc, InsufficientStockError):
            body.update(
                {
                    "item_name": exc.item_name,
                    "available": exc.available,
                    "required": exc.required,
                }
            )
        return Response(body, status=status_for(exc))

    return exception_handler(exc, context)
