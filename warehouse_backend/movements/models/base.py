# movements/models/base.py

"""
Shared shape of a stock movement.

Header (Entry | Delivery):
- date, optional observation, exactly one counterparty (declared by the subclass)
- audit fields from core.models.AuditedModel
- owns its lines: deleting the header deletes them (CASCADE, reverse name `details`)

Line:
- product (PROTECT) + positive quantity
- the sign of its stock effect comes from the movement kind's Direction
- integer pk, so `details` read back in insertion order
"""

from django.db import models
from django.utils import timezone

from core.models import AuditedModel


class Direction(models.TextChoices):
    INWARD = "INWARD", "Inward (increases stock)"
    OUTWARD = "OUTWARD", "Outward (decreases stock)"


class MovementHeader(AuditedModel):
    date = models.DateTimeField(default=timezone.now)
    observation = models.TextField(blank=True, null=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class MovementLine(models.Model):
    id = models.BigAutoField(primary_key=True)
    quantity = models.PositiveIntegerField()

    class Meta:
        abstract = True
        ordering = ["id"]
