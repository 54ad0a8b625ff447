"""Listing store port: lookup plus compare-and-swap stock decrement."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Listing:
    """A seller's offer for a catalogue item."""

    id: str
    seller_id: str
    product_name: str
    price: float
    quantity: int
    is_active: bool = True


class ListingStorePort(ABC):
    """Abstract interface for listing stores."""

    @abstractmethod
    def find_by_id(self, listing_id: str) -> Listing | None:
        """Return the listing, or None when it does not exist."""
        ...

    @abstractmethod
    def reserve_quantity(self, listing_id: str, qty: int) -> bool:
        """Subtract ``qty`` only if the listing still holds at least ``qty``.

        The check and the write happen atomically. Returns False when the
        decrement was refused (unknown listing or not enough stock).
        """
        ...

    @abstractmethod
    def release_quantity(self, listing_id: str, qty: int) -> None:
        """Give back ``qty`` previously taken by ``reserve_quantity``."""
        ...

    @abstractmethod
    def upsert(self, listing: Listing) -> Listing:
        """Create or replace a listing. Used to seed stores."""
        ...
