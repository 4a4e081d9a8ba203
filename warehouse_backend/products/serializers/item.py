# products/serializers/item.py

from rest_framework import serializers

from products.models import Item

AUDIT_FIELDS = ["created_at", "updated_at", "created_by", "updated_by"]


class ItemSerializer(serializers.ModelSerializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=255)

    class Meta:
        model = Item
        fields = ["id", "name", "description", "category", *AUDIT_FIELDS]
        read_only_fields = ["id", *AUDIT_FIELDS]

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v
