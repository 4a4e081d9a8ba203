# movements/services/__init__.py

from movements.models import Delivery, DeliveryLine, Direction, Entry, EntryLine
from partners.models import Client, Provider

from .movement_service import MovementKind, MovementService

ENTRY = MovementKind(
    label="Entry",
    direction=Direction.INWARD,
    header_model=Entry,
    line_model=EntryLine,
    header_field="entry",
    counterparty_field="provider",
    counterparty_model=Provider,
)

DELIVERY = MovementKind(
    label="Delivery",
    direction=Direction.OUTWARD,
    header_model=Delivery,
    line_model=DeliveryLine,
    header_field="delivery",
    counterparty_field="client",
    counterparty_model=Client,
)

entry_service = MovementService(ENTRY)
delivery_service = MovementService(DELIVERY)

__all__ = [
    "MovementKind",
    "MovementService",
    "ENTRY",
    "DELIVERY",
    "entry_service",
    "delivery_service",
]
