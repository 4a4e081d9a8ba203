# core/db_errors.py

"""
STORE ERROR TRANSLATION

Maps low-level database failures onto the inventory error taxonomy.

Recognised shapes:
- MySQL errno (args[0]): 1062 duplicate, 1451 row referenced, 1452 missing parent
- Postgres SQLSTATE (pgcode / sqlstate on the driver error): 23505, 23503
- SQLite messages: "UNIQUE constraint failed", "FOREIGN KEY constraint failed"
- Django ProtectedError / RestrictedError (PROTECT / RESTRICT foreign keys)

Anything else becomes UnexpectedError. Translation happens once, at the
unit-of-work boundary; nothing here retries.
"""

from __future__ import annotations

from django.db import DatabaseError, IntegrityError
from django.db.models import ProtectedError, RestrictedError

from core.exceptions import (
    ConflictError,
    InventoryServiceError,
    InvalidReferenceError,
    UnexpectedError,
)

MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_ROW_IS_REFERENCED = 1451
MYSQL_NO_REFERENCED_ROW = 1452

PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


def _mysql_errno(exc: BaseException):
    args = getattr(exc, "args", None) or ()
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _sqlstate(exc: BaseException):
    cause = exc.__cause__ or exc
    return getattr(cause, "pgcode", None) or getattr(cause, "sqlstate", None)


def translate_db_error(exc: BaseException, action: str) -> InventoryServiceError:
    """
    Return (never raise) the typed error for a store failure raised while `action`.
    """
    if isinstance(exc, InventoryServiceError):
        return exc

    if isinstance(exc, (ProtectedError, RestrictedError)):
        return ConflictError("Item cannot be deleted: it is referenced elsewhere")

    if isinstance(exc, IntegrityError):
        errno = _mysql_errno(exc)
        if errno == MYSQL_DUPLICATE_ENTRY:
            return ConflictError(f"Duplicate entry while {action}")
        if errno == MYSQL_ROW_IS_REFERENCED:
            return ConflictError("Item cannot be deleted: it is referenced elsewhere")
        if errno == MYSQL_NO_REFERENCED_ROW:
            return InvalidReferenceError(f"Referenced record does not exist while {action}")

        state = _sqlstate(exc)
        message = str(exc)
        lowered = message.lower()

        if state == PG_UNIQUE_VIOLATION or "unique constraint" in lowered or "duplicate" in lowered:
            return ConflictError(f"Duplicate entry while {action}")

        if state == PG_FOREIGN_KEY_VIOLATION or "foreign key" in lowered:
            if "update or delete" in lowered:
                return ConflictError("Item cannot be deleted: it is referenced elsewhere")
            return InvalidReferenceError(f"Referenced record does not exist while {action}")

        if "check constraint" in lowered:
            return ConflictError(f"Constraint violated while {action}")

    if isinstance(exc, DatabaseError):
        return UnexpectedError(f"Unexpected error while {action}")

    return UnexpectedError(f"Unexpected error while {action}: {exc}")
