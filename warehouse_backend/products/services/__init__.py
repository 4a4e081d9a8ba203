from . import stock_ledger
from .catalog import filter_products, products_with_item

__all__ = [
    "stock_ledger",
    "filter_products",
    "products_with_item",
]
