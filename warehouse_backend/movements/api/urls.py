# movements/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from movements.api.views import DeliveryViewSet, EntryViewSet

router = DefaultRouter()
router.register(r"entries", EntryViewSet, basename="entries")
router.register(r"deliveries", DeliveryViewSet, basename="deliveries")

urlpatterns = [
    path("", include(router.urls)),
]
