from .item import Item
from .product import Product

__all__ = ["Item", "Product"]
