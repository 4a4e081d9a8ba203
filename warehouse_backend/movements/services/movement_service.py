# movements/services/movement_service.py

"""
======================================================
PATH: movements/services/movement_service.py
======================================================
MOVEMENT SERVICE

One implementation for both movement kinds. The kind decides the sign:

    Entry    (INWARD)   apply = increment            revert = reserve + decrement
    Delivery (OUTWARD)  apply = reserve + decrement  revert = increment

Canonical flow of every write:
1) Open a unit of work (one transaction)
2) Lock the header, then its lines (a line write locks its header first)
3) Move stock through products.services.stock_ledger
4) Persist header / line rows
5) Commit; any failure rolls back ALL of the above before the error escapes

Rules:
- NotFoundError / InsufficientStockError propagate unchanged
- store failures are translated once (core.db_errors), never retried
- an Entry whose stock was already consumed downstream cannot be removed or
  shrunk (the reverse effect is a guarded decrement)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db.models import Prefetch

from core.exceptions import InvalidInputError, NotFoundError
from core.pagination import PaginationResult, paginate
from core.unit_of_work import unit_of_work
from movements.models import Direction
from products.services import stock_ledger

logger = logging.getLogger("movements")

HEADER_PATCH_FIELDS = {"date", "observation", "counterparty_id"}


@dataclass(frozen=True)
class MovementKind:
    label: str
    direction: str
    header_model: Any
    line_model: Any
    header_field: str
    counterparty_field: str
    counterparty_model: Any


def _get(queryset, pk, message: str):
    try:
        return queryset.get(pk=pk)
    except (queryset.model.DoesNotExist, ValidationError, ValueError):
        raise NotFoundError(message)


def _normalize_lines(lines: Optional[Iterable[Mapping]]) -> list[tuple[Any, int]]:
    normalized = []
    for index, line in enumerate(lines or []):
        try:
            product_id = line["product_id"]
            quantity = line["quantity"]
        except (KeyError, TypeError):
            raise InvalidInputError(f"line {index}: product_id and quantity are required")
        normalized.append((product_id, stock_ledger.to_quantity(quantity)))

    if not normalized:
        raise InvalidInputError("At least one line is required")
    return normalized


class MovementService:
    def __init__(self, kind: MovementKind):
        self.kind = kind

    def __repr__(self):
        return f"MovementService({self.kind.label})"

    # -----------------------------
    # Stock effects
    # -----------------------------
    def _apply(self, product_id, qty: int) -> None:
        if self.kind.direction == Direction.INWARD:
            stock_ledger.increment(product_id, qty)
        else:
            stock_ledger.reserve(product_id, qty)
            stock_ledger.decrement(product_id, qty)

    def _revert(self, product_id, qty: int) -> None:
        if self.kind.direction == Direction.INWARD:
            stock_ledger.reserve(product_id, qty)
            stock_ledger.decrement(product_id, qty)
        else:
            stock_ledger.increment(product_id, qty)

    # -----------------------------
    # Lookups
    # -----------------------------
    def _lines(self):
        return self.kind.line_model.objects.select_related("product__item")

    def _headers(self):
        return self.kind.header_model.objects.select_related(
            self.kind.counterparty_field
        ).prefetch_related(
            Prefetch("details", queryset=self._lines().order_by("id")),
        )

    def _counterparty(self, counterparty_id):
        model = self.kind.counterparty_model
        return _get(
            model.objects.all(),
            counterparty_id,
            f"{model._meta.verbose_name.title()} with id {counterparty_id} not found",
        )

    def _lock_header(self, header_id):
        return _get(
            self.kind.header_model.objects.select_for_update(),
            header_id,
            f"{self.kind.label} with id {header_id} not found",
        )

    def _lock_line(self, line_id):
        """
        Lock the owning header, then the line. Every write to one movement
        takes header -> line -> product locks in that order.
        """
        message = f"Detail with id {line_id} not found"
        line = _get(self.kind.line_model.objects.all(), line_id, message)
        self._lock_header(getattr(line, f"{self.kind.header_field}_id"))
        return _get(self.kind.line_model.objects.select_for_update(), line_id, message)

    def find_one(self, header_id):
        """
        Header with counterparty, lines, each line's product and its item.
        """
        return _get(
            self._headers(),
            header_id,
            f"{self.kind.label} with id {header_id} not found",
        )

    def find_all(self):
        return list(self._headers().order_by("-created_at", "-id"))

    def filter(
        self,
        *,
        date_start=None,
        date_end=None,
        counterparty_id=None,
        limit=None,
        offset=None,
    ) -> PaginationResult:
        """
        Page of headers created between date_start and date_end (whole days,
        both inclusive), optionally for one counterparty, oldest first.
        """
        qs = self._headers()

        if date_start:
            qs = qs.filter(created_at__date__gte=date_start)
        if date_end:
            qs = qs.filter(created_at__date__lte=date_end)
        if counterparty_id:
            qs = qs.filter(**{f"{self.kind.counterparty_field}_id": counterparty_id})

        return paginate(qs.order_by("created_at", "id"), limit=limit, offset=offset)

    # -----------------------------
    # Header operations
    # -----------------------------
    def create(
        self,
        *,
        date=None,
        observation: Optional[str] = None,
        counterparty_id,
        lines: Iterable[Mapping],
        actor_id=None,
    ):
        normalized = _normalize_lines(lines)

        with unit_of_work(f"creating {self.kind.label.lower()}"):
            counterparty = self._counterparty(counterparty_id)

            header = self.kind.header_model(
                observation=observation,
                created_by_id=actor_id,
                updated_by_id=actor_id,
                **{self.kind.counterparty_field: counterparty},
            )
            if date is not None:
                header.date = date
            header.save()

            for product_id, qty in normalized:
                self._apply(product_id, qty)
                self.kind.line_model.objects.create(
                    product_id=product_id,
                    quantity=qty,
                    **{self.kind.header_field: header},
                )

        logger.info(
            "%s %s created with %d line(s)",
            self.kind.label,
            header.pk,
            len(normalized),
        )
        return self.find_one(header.pk)

    def update_header(self, header_id, *, patch: Mapping, actor_id=None):
        """
        Merge date / observation / counterparty_id into the header.
        Lines and stock are never touched here.
        """
        unknown = set(patch) - HEADER_PATCH_FIELDS
        if unknown:
            raise InvalidInputError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        with unit_of_work(f"updating {self.kind.label.lower()} header"):
            header = self._lock_header(header_id)

            if "counterparty_id" in patch:
                setattr(
                    header,
                    self.kind.counterparty_field,
                    self._counterparty(patch["counterparty_id"]),
                )
            if "date" in patch and patch["date"] is not None:
                header.date = patch["date"]
            if "observation" in patch:
                header.observation = patch["observation"]

            header.updated_by_id = actor_id
            header.save()

        return self.find_one(header_id)

    def remove(self, header_id) -> dict:
        with unit_of_work(f"removing {self.kind.label.lower()}"):
            header = self._lock_header(header_id)

            lines = list(header.details.select_for_update().order_by("id"))
            for line in lines:
                self._revert(line.product_id, line.quantity)

            header.delete()

        logger.info(
            "%s %s removed, %d line(s) reversed",
            self.kind.label,
            header_id,
            len(lines),
        )
        return {"deleted": True, "id": header_id}

    # -----------------------------
    # Line (detail) operations
    # -----------------------------
    def add_detail(self, header_id, *, product_id, quantity):
        qty = stock_ledger.to_quantity(quantity)

        with unit_of_work(f"adding {self.kind.label.lower()} detail"):
            header = self._lock_header(header_id)
            self._apply(product_id, qty)
            line = self.kind.line_model.objects.create(
                product_id=product_id,
                quantity=qty,
                **{self.kind.header_field: header},
            )

        return self._lines().get(pk=line.pk)

    def update_detail(self, line_id, *, quantity):
        """
        Set a line's quantity and move stock by the difference:
        delta > 0 applies the forward effect, delta < 0 the reverse, 0 nothing.
        """
        qty = stock_ledger.to_quantity(quantity)

        with unit_of_work(f"updating {self.kind.label.lower()} detail"):
            line = self._lock_line(line_id)
            delta = qty - line.quantity

            line.quantity = qty
            line.save(update_fields=["quantity"])

            if delta > 0:
                self._apply(line.product_id, delta)
            elif delta < 0:
                self._revert(line.product_id, -delta)

        logger.debug("%s detail %s changed by %+d", self.kind.label, line_id, delta)
        return self._lines().get(pk=line_id)

    def remove_detail(self, line_id) -> dict:
        with unit_of_work(f"removing {self.kind.label.lower()} detail"):
            line = self._lock_line(line_id)
            self._revert(line.product_id, line.quantity)
            line.delete()

        return {"ok": True}
