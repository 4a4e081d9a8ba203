# core/models.py

"""
Shared abstract base for every warehouse table.

- UUID primary keys
- created/updated timestamps
- created_by / updated_by: actor attribution, kept when the user row is deleted
"""

import uuid

from django.conf import settings
from django.db import models

User = settings.AUTH_USER_MODEL


class AuditedModel(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    updated_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        abstract = True
