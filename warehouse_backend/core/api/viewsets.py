# core/api/viewsets.py

"""
Base viewset for the plain reference tables (items, products, clients, providers).

- role-gated: reads for any signed-in role, writes need `write_capability`
- stamps created_by / updated_by from request.user
- delete of a referenced row surfaces as ConflictError (409)
"""

from django.db.models import ProtectedError, RestrictedError
from rest_framework import viewsets

from core.db_errors import translate_db_error
from permissions.roles import CAP_CATALOG_EDIT, CapabilityGatedMixin


class AuditedModelViewSet(CapabilityGatedMixin, viewsets.ModelViewSet):
    write_capability = CAP_CATALOG_EDIT
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user, updated_by=self.request.user)

    def perform_update(self, serializer):
        serializer.save(updated_by=self.request.user)

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except (ProtectedError, RestrictedError) as exc:
            raise translate_db_error(exc, f"deleting {instance._meta.verbose_name}") from exc
