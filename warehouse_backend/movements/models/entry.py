# movements/models/entry.py

from django.db import models

from partners.models import Provider
from products.models import Product

from .base import MovementHeader, MovementLine


class Entry(MovementHeader):
    """
    Goods received from a provider. Every line INCREASES stock.
    """

    provider = models.ForeignKey(
        Provider,
        on_delete=models.PROTECT,
        related_name="entries",
    )

    class Meta(MovementHeader.Meta):
        verbose_name_plural = "entries"
        indexes = [
            models.Index(fields=["created_at"], name="entry_created_at_idx"),
        ]

    def __str__(self):
        return f"Entry {self.pk} ({self.provider.name})"


class EntryLine(MovementLine):
    entry = models.ForeignKey(
        Entry,
        on_delete=models.CASCADE,
        related_name="details",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="entry_lines",
    )

    class Meta(MovementLine.Meta):
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="entry_line_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"+{self.quantity} x {self.product_id}"
