# movements/models/delivery.py

from django.db import models

from partners.models import Client
from products.models import Product

from .base import MovementHeader, MovementLine


class Delivery(MovementHeader):
    """
    Goods handed to a client. Every line DECREASES stock.
    """

    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        related_name="deliveries",
    )

    class Meta(MovementHeader.Meta):
        verbose_name_plural = "deliveries"
        indexes = [
            models.Index(fields=["created_at"], name="delivery_created_at_idx"),
        ]

    def __str__(self):
        return f"Delivery {self.pk} ({self.client.name})"


class DeliveryLine(MovementLine):
    delivery = models.ForeignKey(
        Delivery,
        on_delete=models.CASCADE,
        related_name="details",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="delivery_lines",
    )

    class Meta(MovementLine.Meta):
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="delivery_line_quantity_positive",
            ),
        ]

    def __str__(self):
        return f"-{self.quantity} x {self.product_id}"
