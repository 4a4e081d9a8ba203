# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: CRUD shape. `item_id` is written, `item` is read back nested.
- quantity is the opening balance: accepted on create, refused on update
  (stock only moves through entries and deliveries).
- ProductFilterQuerySerializer: query-string validation for the paginated list.
"""

from rest_framework import serializers

from products.models import Item, Product
from products.serializers.item import AUDIT_FIELDS, ItemSerializer


class ProductSerializer(serializers.ModelSerializer):
    item = ItemSerializer(read_only=True)
    item_id = serializers.PrimaryKeyRelatedField(
        source="item",
        queryset=Item.objects.all(),
        write_only=True,
    )
    quantity = serializers.IntegerField(min_value=0, required=False, default=0)

    class Meta:
        model = Product
        fields = [
            "id",
            "item",
            "item_id",
            "batch_number",
            "expire_date",
            "quantity",
            *AUDIT_FIELDS,
        ]
        read_only_fields = ["id", "item", *AUDIT_FIELDS]

    def validate_batch_number(self, value):
        return (value or "").strip()

    def update(self, instance, validated_data):
        if "quantity" in validated_data:
            raise serializers.ValidationError(
                {"quantity": "quantity changes only through entries and deliveries"}
            )
        return super().update(instance, validated_data)


class ProductFilterQuerySerializer(serializers.Serializer):
    item_name = serializers.CharField(required=False, allow_blank=True)
    batch_number = serializers.CharField(required=False, allow_blank=True)
    expire_date = serializers.DateField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1)
    offset = serializers.IntegerField(required=False, min_value=0)
