# partners/api/serializers.py

from rest_framework import serializers

from partners.models import Client, Provider

AUDIT_FIELDS = ["created_at", "updated_at", "created_by", "updated_by"]


class _NamedSerializer(serializers.ModelSerializer):
    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v


class ClientSerializer(_NamedSerializer):
    class Meta:
        model = Client
        fields = ["id", "name", "contact_name", *AUDIT_FIELDS]
        read_only_fields = ["id", *AUDIT_FIELDS]


class ProviderSerializer(_NamedSerializer):
    class Meta:
        model = Provider
        fields = [
            "id",
            "name",
            "contact_name",
            "phone",
            "email",
            "address",
            *AUDIT_FIELDS,
        ]
        read_only_fields = ["id", *AUDIT_FIELDS]
