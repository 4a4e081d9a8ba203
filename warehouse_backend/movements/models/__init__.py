from .base import Direction
from .delivery import Delivery, DeliveryLine
from .entry import Entry, EntryLine

__all__ = [
    "Direction",
    "Entry",
    "EntryLine",
    "Delivery",
    "DeliveryLine",
]
