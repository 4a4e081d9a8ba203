# partners/models/client.py

from django.db import models

from core.models import AuditedModel


class Client(AuditedModel):
    """
    Counterparty of a Delivery (stock leaving the warehouse).
    """

    name = models.CharField(max_length=200)
    contact_name = models.CharField(max_length=200, blank=True, default="")

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["name"], name="partners_client_name_idx")]

    def __str__(self):
        return self.name
