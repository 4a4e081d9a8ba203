# movements/api/views.py

"""
MOVEMENT ENDPOINTS (entries + deliveries)

Thin adapters: validate input, call the movement service, serialize the result.
Typed service errors become HTTP statuses in core.api.exception_handler.

    POST   /                       create (header + details, stock moves)
    GET    /                       filter (date_start, date_end, <counterparty>_id, limit, offset)
    GET    /all/                   every header, newest first
    GET    /<id>/                  one header with details
    PATCH  /<id>/                  header fields only
    DELETE /<id>/                  remove, reversing every detail
    POST   /<id>/details/          add a detail
    PATCH  /details/<line_id>/     change a detail's quantity
    DELETE /details/<line_id>/     remove a detail
"""

from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from movements.api.serializers import (
    DeliveryCreateSerializer,
    DeliveryFilterSerializer,
    DeliveryLineSerializer,
    DeliveryPatchSerializer,
    DeliverySerializer,
    DetailCreateSerializer,
    DetailUpdateSerializer,
    EntryCreateSerializer,
    EntryFilterSerializer,
    EntryLineSerializer,
    EntryPatchSerializer,
    EntrySerializer,
)
from movements.services import delivery_service, entry_service
from permissions.roles import CAP_MOVEMENTS_EDIT, CapabilityGatedMixin


class MovementViewSet(CapabilityGatedMixin, viewsets.ViewSet):
    """
    Shared endpoints; subclasses pick the service and serializers.
    """

    write_capability = CAP_MOVEMENTS_EDIT
    lookup_field = "pk"
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    service = None
    counterparty_key = ""
    output_serializer_class = None
    line_serializer_class = None
    create_serializer_class = None
    patch_serializer_class = None
    filter_serializer_class = None

    def _context(self):
        return {"request": self.request}

    def _render(self, header, *, code=status.HTTP_200_OK):
        return Response(
            self.output_serializer_class(header, context=self._context()).data,
            status=code,
        )

    def _render_line(self, line, *, code=status.HTTP_200_OK):
        return Response(
            self.line_serializer_class(line, context=self._context()).data,
            status=code,
        )

    def create(self, request):
        s = self.create_serializer_class(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        header = self.service.create(
            date=data.get("date"),
            observation=data.get("observation"),
            counterparty_id=data[self.counterparty_key],
            lines=data["details"],
            actor_id=request.user.pk,
        )
        return self._render(header, code=status.HTTP_201_CREATED)

    def list(self, request):
        s = self.filter_serializer_class(data=request.query_params)
        s.is_valid(raise_exception=True)
        params = s.validated_data

        page = self.service.filter(
            date_start=params.get("date_start"),
            date_end=params.get("date_end"),
            counterparty_id=params.get(self.counterparty_key),
            limit=params.get("limit", settings.PAGINATION_DEFAULT_LIMIT),
            offset=params.get("offset", 0),
        )
        return Response(page.to_response(self.output_serializer_class, context=self._context()))

    @action(detail=False, methods=["get"], url_path="all")
    def list_all(self, request):
        headers = self.service.find_all()
        return Response(
            self.output_serializer_class(headers, many=True, context=self._context()).data
        )

    def retrieve(self, request, pk=None):
        return self._render(self.service.find_one(pk))

    def partial_update(self, request, pk=None):
        s = self.patch_serializer_class(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        patch = dict(s.validated_data)
        if self.counterparty_key in patch:
            patch["counterparty_id"] = patch.pop(self.counterparty_key)

        header = self.service.update_header(pk, patch=patch, actor_id=request.user.pk)
        return self._render(header)

    def destroy(self, request, pk=None):
        return Response(self.service.remove(pk))

    @action(detail=True, methods=["post"], url_path="details")
    def add_detail(self, request, pk=None):
        s = DetailCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        line = self.service.add_detail(
            pk,
            product_id=s.validated_data["product_id"],
            quantity=s.validated_data["quantity"],
        )
        return self._render_line(line, code=status.HTTP_201_CREATED)

    @action(
        detail=False,
        methods=["patch", "delete"],
        url_path=r"details/(?P<line_id>[0-9]+)",
    )
    def detail_line(self, request, line_id=None):
        if request.method == "DELETE":
            return Response(self.service.remove_detail(line_id))

        s = DetailUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        line = self.service.update_detail(line_id, quantity=s.validated_data["quantity"])
        return self._render_line(line)


def _schema_for(tag, *, output, line, create, patch, query):
    return extend_schema_view(
        create=extend_schema(tags=[tag], request=create, responses={201: output}),
        list=extend_schema(
            tags=[tag],
            parameters=[query],
            responses={200: OpenApiResponse(description="{data: [...], meta: {...}}")},
        ),
        list_all=extend_schema(tags=[tag], responses=output(many=True)),
        retrieve=extend_schema(tags=[tag], responses=output),
        partial_update=extend_schema(tags=[tag], request=patch, responses=output),
        destroy=extend_schema(tags=[tag], responses={200: dict}),
        add_detail=extend_schema(
            tags=[tag], request=DetailCreateSerializer, responses={201: line}
        ),
        detail_line=extend_schema(
            tags=[tag], request=DetailUpdateSerializer, responses={200: line}
        ),
    )


@_schema_for(
    "entries",
    output=EntrySerializer,
    line=EntryLineSerializer,
    create=EntryCreateSerializer,
    patch=EntryPatchSerializer,
    query=EntryFilterSerializer,
)
class EntryViewSet(MovementViewSet):
    service = entry_service
    counterparty_key = "provider_id"
    output_serializer_class = EntrySerializer
    line_serializer_class = EntryLineSerializer
    create_serializer_class = EntryCreateSerializer
    patch_serializer_class = EntryPatchSerializer
    filter_serializer_class = EntryFilterSerializer


@_schema_for(
    "deliveries",
    output=DeliverySerializer,
    line=DeliveryLineSerializer,
    create=DeliveryCreateSerializer,
    patch=DeliveryPatchSerializer,
    query=DeliveryFilterSerializer,
)
class DeliveryViewSet(MovementViewSet):
    service = delivery_service
    counterparty_key = "client_id"
    output_serializer_class = DeliverySerializer
    line_serializer_class = DeliveryLineSerializer
    create_serializer_class = DeliveryCreateSerializer
    patch_serializer_class = DeliveryPatchSerializer
    filter_serializer_class = DeliveryFilterSerializer
