# core/pagination.py

"""
OFFSET / LIMIT PAGINATION

Shared by every filtered list (movements, products).

Shape returned to callers:
    {
        "data": [...],
        "meta": {"total": T, "offset": O, "limit": L, "nextOffset": O+L | None}
    }

Rules:
- limit >= 1 (default 10), offset >= 0 (default 0)
- total is the full match count, independent of limit/offset
- nextOffset = offset + limit, or None once that reaches total
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from core.exceptions import InvalidInputError

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


@dataclass(frozen=True)
class PageMeta:
    total: int
    offset: int
    limit: int
    next_offset: Optional[int]

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "offset": self.offset,
            "limit": self.limit,
            "nextOffset": self.next_offset,
        }


@dataclass(frozen=True)
class PaginationResult:
    data: list
    meta: PageMeta

    def to_response(self, serializer_class, *, context: Optional[dict] = None) -> dict:
        return {
            "data": serializer_class(self.data, many=True, context=context or {}).data,
            "meta": self.meta.as_dict(),
        }


def _to_int(value: Any, *, field_name: str, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{field_name} must be an integer")


def next_offset(*, total: int, offset: int, limit: int) -> Optional[int]:
    candidate = offset + limit
    if candidate >= total:
        return None
    return candidate


def paginate(queryset, *, limit=None, offset=None) -> PaginationResult:
    limit = _to_int(limit, field_name="limit", default=DEFAULT_LIMIT)
    offset = _to_int(offset, field_name="offset", default=DEFAULT_OFFSET)

    if limit < 1:
        raise InvalidInputError("limit must be greater than or equal to 1")
    if offset < 0:
        raise InvalidInputError("offset must be greater than or equal to 0")

    total = queryset.count()
    rows = list(queryset[offset:offset + limit])

    return PaginationResult(
        data=rows,
        meta=PageMeta(
            total=total,
            offset=offset,
            limit=limit,
            next_offset=next_offset(total=total, offset=offset, limit=limit),
        ),
    )
