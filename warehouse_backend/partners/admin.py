from django.contrib import admin

from partners.models import Client, Provider


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_name", "created_at")
    search_fields = ("name", "contact_name")


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_name", "phone", "email", "created_at")
    search_fields = ("name", "contact_name", "email")
