# products/services/stock_ledger.py

"""
======================================================
PATH: products/services/stock_ledger.py
======================================================
STOCK LEDGER

The only code allowed to change Product.quantity after creation.

Operations:
- reserve(product_id, qty)    lock the row, refuse if quantity < qty
- increment(product_id, qty)  quantity = quantity + qty (single UPDATE)
- decrement(product_id, qty)  quantity = quantity - qty (single UPDATE, never below 0)

Rules:
- qty is a positive integer
- every call joins the caller's transaction (unit_of_work); none commits on its own
- the lock taken by reserve() is held until that transaction ends, so a
  reserve() followed by decrement() cannot race another writer
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db.models import F
from django.utils import timezone

from core.exceptions import InsufficientStockError, InvalidInputError, NotFoundError
from core.unit_of_work import require_ambient_transaction
from products.models import Product

logger = logging.getLogger("inventory")


def to_quantity(value) -> int:
    """Coerce `value` to a positive integer quantity or raise InvalidInputError."""
    if isinstance(value, bool):
        # bool is an int subclass
        raise InvalidInputError("quantity must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidInputError("quantity must be an integer")
    try:
        qty = int(value)
    except (TypeError, ValueError):
        raise InvalidInputError("quantity must be an integer")
    if qty <= 0:
        raise InvalidInputError("quantity must be greater than 0")
    return qty


def _not_found(product_id) -> NotFoundError:
    return NotFoundError(f"Product with id {product_id} not found")


def _rows(product_id):
    """Queryset for one product; a malformed id is NotFoundError, like a missing one."""
    try:
        return Product.objects.filter(pk=product_id)
    except (ValidationError, ValueError):
        raise _not_found(product_id)


def _refuse(product: Product, *, required: int) -> InsufficientStockError:
    logger.warning(
        "Stock decrement refused",
        extra={
            "product_id": str(product.pk),
            "available": product.quantity,
            "required": required,
        },
    )
    return InsufficientStockError(
        item_name=product.item.name,
        available=product.quantity,
        required=required,
    )


def reserve(product_id, qty) -> Product:
    """
    Lock the product row for the rest of the transaction and verify that
    `qty` units can be taken out. Does not change the quantity.
    """
    require_ambient_transaction()
    qty = to_quantity(qty)

    try:
        product = Product.objects.select_for_update().get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError):
        raise _not_found(product_id)

    if product.quantity < qty:
        raise _refuse(product, required=qty)

    return product


def increment(product_id, qty) -> None:
    require_ambient_transaction()
    qty = to_quantity(qty)

    touched = _rows(product_id).update(
        quantity=F("quantity") + qty,
        updated_at=timezone.now(),
    )
    if touched == 0:
        raise _not_found(product_id)

    logger.debug("Stock +%s on product %s", qty, product_id)


def decrement(product_id, qty) -> None:
    require_ambient_transaction()
    qty = to_quantity(qty)

    touched = _rows(product_id).filter(quantity__gte=qty).update(
        quantity=F("quantity") - qty,
        updated_at=timezone.now(),
    )
    if touched == 0:
        product = _rows(product_id).select_related("item").first()
        if product is None:
            raise _not_found(product_id)
        raise _refuse(product, required=qty)

    logger.debug("Stock -%s on product %s", qty, product_id)
