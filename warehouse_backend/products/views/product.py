# products/views/product.py

"""
PRODUCT VIEWSET

- GET  /api/products/        paginated filter (stock on hand only)
- GET  /api/products/all/    every product, unpaginated
- GET  /api/products/<id>/   single product with its item
- POST / PATCH / DELETE      catalogue edit capability
"""

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.decorators import action
from rest_framework.response import Response

from core.api.viewsets import AuditedModelViewSet
from products.serializers import ProductFilterQuerySerializer, ProductSerializer
from products.services import filter_products, products_with_item


class ProductViewSet(AuditedModelViewSet):
    serializer_class = ProductSerializer

    def get_queryset(self):
        return products_with_item().order_by("item__name", "expire_date")

    @extend_schema(
        tags=["products"],
        parameters=[
            OpenApiParameter("item_name", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("batch_number", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                "expire_date",
                str,
                OpenApiParameter.QUERY,
                required=False,
                description="YYYY-MM-DD; products expiring strictly before this day",
            ),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("offset", int, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: OpenApiResponse(description="{data: [...], meta: {...}}")},
        description="Products with stock on hand, filtered and paginated",
    )
    def list(self, request, *args, **kwargs):
        query = ProductFilterQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        page = filter_products(
            item_name=params.get("item_name", ""),
            batch_number=params.get("batch_number", ""),
            expire_date=params.get("expire_date"),
            limit=params.get("limit", settings.PAGINATION_DEFAULT_LIMIT),
            offset=params.get("offset", 0),
        )
        return Response(page.to_response(ProductSerializer, context={"request": request}))

    @extend_schema(tags=["products"], responses=ProductSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="all")
    def list_all(self, request):
        qs = self.get_queryset()
        return Response(self.get_serializer(qs, many=True).data)

    @extend_schema(tags=["products"])
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(tags=["products"])
    def create(self, request, *args, **kwargs):
        return super().create(request, *args, **kwargs)

    @extend_schema(tags=["products"])
    def partial_update(self, request, *args, **kwargs):
        return super().partial_update(request, *args, **kwargs)

    @extend_schema(tags=["products"])
    def destroy(self, request, *args, **kwargs):
        return super().destroy(request, *args, **kwargs)
