# products/models/item.py

from django.db import models

from core.models import AuditedModel


class Item(AuditedModel):
    """
    Catalogue entry (what a product IS). Stock lives on Product batches.
    """

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=120, blank=True, default="")

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
