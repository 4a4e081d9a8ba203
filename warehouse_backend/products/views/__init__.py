# products/views/__init__.py

from .item import ItemViewSet
from .product import ProductViewSet

__all__ = [
    "ItemViewSet",
    "ProductViewSet",
]
