from .item import ItemSerializer
from .product import ProductFilterQuerySerializer, ProductSerializer

__all__ = [
    "ItemSerializer",
    "ProductSerializer",
    "ProductFilterQuerySerializer",
]
