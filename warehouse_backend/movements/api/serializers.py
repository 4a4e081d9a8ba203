# movements/api/serializers.py

"""
MOVEMENT SERIALIZERS

Input (validated here, then handed to movements.services as plain data):
- <Kind>CreateSerializer   header fields + counterparty id + non-empty `details`
- <Kind>PatchSerializer    any of date / observation / counterparty id
- <Kind>FilterSerializer   date_start, date_end, counterparty id, limit, offset
- DetailCreateSerializer / DetailUpdateSerializer

Output:
- EntrySerializer / DeliverySerializer with counterparty and lines
  (each line's product with its item) nested
"""

from rest_framework import serializers

from movements.models import Delivery, DeliveryLine, Entry, EntryLine
from partners.api.serializers import ClientSerializer, ProviderSerializer
from products.serializers import ProductSerializer

AUDIT_FIELDS = ["created_at", "updated_at", "created_by", "updated_by"]


# ---------------- INPUT ----------------
class DetailCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class DetailUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class _MovementCreateSerializer(serializers.Serializer):
    date = serializers.DateTimeField(required=False)
    observation = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    details = DetailCreateSerializer(many=True, allow_empty=False)


class EntryCreateSerializer(_MovementCreateSerializer):
    provider_id = serializers.UUIDField()


class DeliveryCreateSerializer(_MovementCreateSerializer):
    client_id = serializers.UUIDField()


class _MovementPatchSerializer(serializers.Serializer):
    date = serializers.DateTimeField(required=False)
    observation = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EntryPatchSerializer(_MovementPatchSerializer):
    provider_id = serializers.UUIDField(required=False)


class DeliveryPatchSerializer(_MovementPatchSerializer):
    client_id = serializers.UUIDField(required=False)


class _MovementFilterSerializer(serializers.Serializer):
    date_start = serializers.DateField(required=False)
    date_end = serializers.DateField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1)
    offset = serializers.IntegerField(required=False, min_value=0)

    def validate(self, attrs):
        start, end = attrs.get("date_start"), attrs.get("date_end")
        if start and end and start > end:
            raise serializers.ValidationError("date_start must be on or before date_end")
        return attrs


class EntryFilterSerializer(_MovementFilterSerializer):
    provider_id = serializers.UUIDField(required=False)


class DeliveryFilterSerializer(_MovementFilterSerializer):
    client_id = serializers.UUIDField(required=False)


# ---------------- OUTPUT ----------------
class EntryLineSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)

    class Meta:
        model = EntryLine
        fields = ["id", "product", "quantity"]
        read_only_fields = fields


class DeliveryLineSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)

    class Meta:
        model = DeliveryLine
        fields = ["id", "product", "quantity"]
        read_only_fields = fields


class EntrySerializer(serializers.ModelSerializer):
    provider = ProviderSerializer(read_only=True)
    details = EntryLineSerializer(many=True, read_only=True)

    class Meta:
        model = Entry
        fields = ["id", "date", "observation", "provider", "details", *AUDIT_FIELDS]
        read_only_fields = fields


class DeliverySerializer(serializers.ModelSerializer):
    client = ClientSerializer(read_only=True)
    details = DeliveryLineSerializer(many=True, read_only=True)

    class Meta:
        model = Delivery
        fields = ["id", "date", "observation", "client", "details", *AUDIT_FIELDS]
        read_only_fields = fields
