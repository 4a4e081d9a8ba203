# core/unit_of_work.py

"""
UNIT OF WORK

One logical operation == one database transaction.

    with unit_of_work("create entry"):
        ...header + lines + stock adjustments...

Guarantees:
- Commit only when the block exits normally.
- Any exception rolls the whole block back BEFORE the error escapes.
- Domain errors (InventoryServiceError) propagate unchanged.
- Django ValidationError becomes InvalidInputError.
- Store failures are translated once (core.db_errors) and never retried.

Nested use (e.g. a service called from a view that is already atomic, or a
TestCase transaction) becomes a savepoint, so the rollback stays scoped to
the failing operation.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError
from django.db import transaction

from core.db_errors import translate_db_error
from core.exceptions import InventoryServiceError, InvalidInputError, UnexpectedError

logger = logging.getLogger("core")


@contextmanager
def unit_of_work(action: str, *, using=None):
    try:
        with transaction.atomic(using=using):
            yield
    except InventoryServiceError:
        raise
    except ValidationError as exc:
        raise InvalidInputError("; ".join(exc.messages)) from exc
    except Exception as exc:
        logger.exception("Unit of work failed while %s", action)
        raise translate_db_error(exc, action) from exc


def require_ambient_transaction(*, using=None) -> None:
    """
    Guard for sub-steps (stock ledger) that must join the caller's transaction
    instead of opening their own commit boundary.
    """
    if not transaction.get_connection(using).in_atomic_block:
        raise UnexpectedError(
            "Stock ledger operations must run inside a unit of work"
        )
