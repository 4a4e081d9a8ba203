# products/views/item.py

from drf_spectacular.utils import extend_schema, extend_schema_view

from core.api.viewsets import AuditedModelViewSet
from products.models import Item
from products.serializers import ItemSerializer


@extend_schema_view(
    list=extend_schema(tags=["items"]),
    retrieve=extend_schema(tags=["items"]),
    create=extend_schema(tags=["items"]),
    partial_update=extend_schema(tags=["items"]),
    destroy=extend_schema(tags=["items"]),
)
class ItemViewSet(AuditedModelViewSet):
    """
    Item catalogue.

    Policy:
    - Any signed-in role can READ items (product forms need them)
    - Catalogue edit capability (admin / superadmin) for writes
    """

    queryset = Item.objects.all().order_by("name")
    serializer_class = ItemSerializer
    filterset_fields = ["category"]
