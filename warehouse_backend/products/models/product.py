# products/models/product.py

from django.db import models

from core.models import AuditedModel

from .item import Item


class Product(AuditedModel):
    """
    One stock-keeping unit: an Item batch with an expiry date and a quantity on hand.

    STOCK MODEL (IMPORTANT):
    - quantity is set once on creation (opening balance)
    - afterwards it changes ONLY through products.services.stock_ledger
    - quantity >= 0 is enforced by the database as well
    """

    item = models.ForeignKey(
        Item,
        on_delete=models.PROTECT,
        related_name="products",
    )

    batch_number = models.CharField(max_length=128, blank=True, default="")
    expire_date = models.DateField()

    quantity = models.IntegerField(default=0)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name="product_quantity_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["expire_date"], name="product_expire_date_idx"),
            models.Index(fields=["batch_number"], name="product_batch_number_idx"),
        ]

    def __str__(self):
        label = self.item.name if self.item_id else "?"
        if self.batch_number:
            label = f"{label} [{self.batch_number}]"
        return label
