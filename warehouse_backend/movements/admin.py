# movements/admin.py

"""
Read-only admin: entries and deliveries move stock, so every change goes
through movements.services (API), never through admin forms.
"""

from django.contrib import admin

from movements.models import Delivery, DeliveryLine, Entry, EntryLine


class _ReadOnlyLineInline(admin.TabularInline):
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity")

    def has_add_permission(self, request, obj=None):
        return False


class EntryLineInline(_ReadOnlyLineInline):
    model = EntryLine


class DeliveryLineInline(_ReadOnlyLineInline):
    model = DeliveryLine


class _ReadOnlyHeaderAdmin(admin.ModelAdmin):
    date_hierarchy = "created_at"
    readonly_fields = (
        "date",
        "observation",
        "created_at",
        "updated_at",
        "created_by",
        "updated_by",
    )

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Entry)
class EntryAdmin(_ReadOnlyHeaderAdmin):
    list_display = ("id", "provider", "date", "created_at", "created_by")
    list_select_related = ("provider", "created_by")
    readonly_fields = ("provider", *_ReadOnlyHeaderAdmin.readonly_fields)
    inlines = [EntryLineInline]


@admin.register(Delivery)
class DeliveryAdmin(_ReadOnlyHeaderAdmin):
    list_display = ("id", "client", "date", "created_at", "created_by")
    list_select_related = ("client", "created_by")
    readonly_fields = ("client", *_ReadOnlyHeaderAdmin.readonly_fields)
    inlines = [DeliveryLineInline]
