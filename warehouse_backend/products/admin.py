# products/admin.py

"""
Admin rules:
- Items are freely editable.
- Product.quantity is read-only here; stock moves only through entries and deliveries.
"""

from django.contrib import admin

from products.models import Item, Product


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "created_at")
    search_fields = ("name", "category")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("item", "batch_number", "expire_date", "quantity")
    list_select_related = ("item",)
    search_fields = ("item__name", "batch_number")
    list_filter = ("expire_date",)
    readonly_fields = ("quantity", "created_at", "updated_at", "created_by", "updated_by")
