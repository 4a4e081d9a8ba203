# partners/models/provider.py

from django.db import models

from core.models import AuditedModel


class Provider(AuditedModel):
    """
    Counterparty of an Entry (stock arriving at the warehouse).
    """

    name = models.CharField(max_length=200)
    contact_name = models.CharField(max_length=200, blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    address = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["name"], name="partners_provider_name_idx")]

    def __str__(self):
        return self.name
