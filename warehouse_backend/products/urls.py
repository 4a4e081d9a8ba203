# products/urls.py

"""
PRODUCTS URLS

Registers under /api/:
    items/
    products/            (GET list is the paginated filter)
    products/all/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import ItemViewSet, ProductViewSet

router = DefaultRouter()

router.register(r"items", ItemViewSet, basename="items")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
]
