"""Ordering error types that protean does not already provide.

Malformed input raises ``protean.exceptions.ValidationError`` and missing
records raise ``protean.exceptions.ObjectNotFoundError``; everything else
the ordering core can fail with lives here.
"""


class OrderingError(Exception):
    """Base class for ordering business errors."""


class Forbidden(OrderingError):
    """The principal is authenticated but may not see or change this scope."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
        self.message = message


class InsufficientStock(OrderingError):
    """A listing cannot cover the requested quantity."""

    def __init__(self, product_name: str | None, available: int, requested: int, listing_id: str | None = None):
        self.product_name = product_name or "items"
        self.available = available
        self.requested = requested
        self.listing_id = listing_id
        self.message = f"Only {available} {self.product_name} available, but you requested {requested}."
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "available": self.available,
            "requested": self.requested,
            "product": self.product_name,
        }


class Conflict(OrderingError):
    """Lost a concurrency race. Safe to retry with fresh data."""

    def __init__(self, message: str = "Resource changed concurrently, please retry"):
        super().__init__(message)
        self.message = message


class StockConflict(Conflict):
    """The conditional decrement was refused because stock moved underneath us."""

    def __init__(self, listing_id: str):
        super().__init__(f"Stock for listing {listing_id} changed during checkout, please retry")
        self.listing_id = listing_id


class Internal(OrderingError):
    """A collaborator failed unexpectedly. Never shown to clients in detail."""

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)
        self.message = message
