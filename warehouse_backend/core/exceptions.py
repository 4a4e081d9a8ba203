# core/exceptions.py

"""
INVENTORY SERVICE ERRORS

Centralized domain errors for the stock ledger and movement services.

Callers (views, management commands, tests) only ever see these types:
- NotFoundError            -> id does not resolve (header, line, product, counterparty)
- InsufficientStockError   -> a decrement would drive quantity below zero
- ConflictError            -> duplicate key / row still referenced elsewhere
- InvalidReferenceError    -> write points at a row that does not exist
- InvalidInputError        -> plain-data input the engine refuses
- UnexpectedError          -> anything else, wrapped after rollback
"""


class InventoryServiceError(Exception):
    """Base exception for all inventory service failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(InventoryServiceError):
    """Raised when a header, line, product or counterparty id does not resolve."""


class InsufficientStockError(InventoryServiceError):
    """Raised when a decrement would leave a product with negative stock."""

    def __init__(self, *, item_name: str, available: int, required: int):
        self.item_name = item_name
        self.available = int(available)
        self.required = int(required)
        super().__init__(
            f"Operation denied: Stock of {item_name} ({self.available}) "
            f"is less than {self.required} required."
        )

    @property
    def shortfall(self) -> int:
        return self.required - self.available


class ConflictError(InventoryServiceError):
    """Raised on duplicate keys or deletes blocked by references."""


class InvalidReferenceError(InventoryServiceError):
    """Raised when a write references a row that does not exist."""


class InvalidInputError(InventoryServiceError):
    """Raised when plain-data input fails engine-level validation."""


class UnexpectedError(InventoryServiceError):
    """Raised for any other failure once the unit of work has rolled back."""
