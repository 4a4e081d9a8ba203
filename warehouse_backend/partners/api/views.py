# partners/api/views.py

from drf_spectacular.utils import extend_schema, extend_schema_view

from core.api.viewsets import AuditedModelViewSet
from partners.api.serializers import ClientSerializer, ProviderSerializer
from partners.models import Client, Provider


@extend_schema_view(
    list=extend_schema(tags=["clients"]),
    retrieve=extend_schema(tags=["clients"]),
    create=extend_schema(tags=["clients"]),
    partial_update=extend_schema(tags=["clients"]),
    destroy=extend_schema(tags=["clients"]),
)
class ClientViewSet(AuditedModelViewSet):
    queryset = Client.objects.all().order_by("name")
    serializer_class = ClientSerializer
    filterset_fields = ["name"]


@extend_schema_view(
    list=extend_schema(tags=["providers"]),
    retrieve=extend_schema(tags=["providers"]),
    create=extend_schema(tags=["providers"]),
    partial_update=extend_schema(tags=["providers"]),
    destroy=extend_schema(tags=["providers"]),
)
class ProviderViewSet(AuditedModelViewSet):
    queryset = Provider.objects.all().order_by("name")
    serializer_class = ProviderSerializer
    filterset_fields = ["name", "email"]
