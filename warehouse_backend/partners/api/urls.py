# partners/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from partners.api.views import ClientViewSet, ProviderViewSet

router = DefaultRouter()
router.register(r"clients", ClientViewSet, basename="clients")
router.register(r"providers", ProviderViewSet, basename="providers")

urlpatterns = [
    path("", include(router.urls)),
]
