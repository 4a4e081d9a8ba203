# products/services/catalog.py

"""
Product lookups used by the products API.

filter_products():
- only products with stock on hand (quantity > 0)
- item_name / batch_number: case-insensitive substring
- expire_date: strict upper bound (expiring BEFORE the given day)
- ordered by item name, then soonest expiry
- offset/limit page via core.pagination
"""

from __future__ import annotations

from core.pagination import PaginationResult, paginate
from products.models import Product


def products_with_item():
    return Product.objects.select_related("item")


def filter_products(
    *,
    item_name: str = "",
    batch_number: str = "",
    expire_date=None,
    limit=None,
    offset=None,
) -> PaginationResult:
    qs = products_with_item().filter(quantity__gt=0)

    item_name = (item_name or "").strip()
    if item_name:
        qs = qs.filter(item__name__icontains=item_name)

    batch_number = (batch_number or "").strip()
    if batch_number:
        qs = qs.filter(batch_number__icontains=batch_number)

    if expire_date:
        qs = qs.filter(expire_date__lt=expire_date)

    qs = qs.order_by("item__name", "expire_date", "created_at")
    return paginate(qs, limit=limit, offset=offset)
