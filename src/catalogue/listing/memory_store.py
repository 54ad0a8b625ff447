"""In-memory listing store: thread-safe, for tests and local development."""

import threading
from dataclasses import replace

from catalogue.listing.port import Listing, ListingStorePort


class InMemoryListingStore(ListingStorePort):
    """Listing store backed by a dict; every read-modify-write holds one lock."""

    def __init__(self, listings: list[Listing] | None = None):
        self._lock = threading.Lock()
        self._listings: dict[str, Listing] = {}
        for listing in listings or []:
            self.upsert(listing)

    def find_by_id(self, listing_id: str) -> Listing | None:
        with self._lock:
            return self._listings.get(str(listing_id))

    def reserve_quantity(self, listing_id: str, qty: int) -> bool:
        with self._lock:
            listing = self._listings.get(str(listing_id))
            if listing is None or listing.quantity < qty:
                return False
            self._listings[listing.id] = replace(listing, quantity=listing.quantity - qty)
            return True

    def release_quantity(self, listing_id: str, qty: int) -> None:
        with self._lock:
            listing = self._listings.get(str(listing_id))
            if listing is not None:
                self._listings[listing.id] = replace(listing, quantity=listing.quantity + qty)

    def upsert(self, listing: Listing) -> Listing:
        with self._lock:
            self._listings[str(listing.id)] = listing
            return listing

    def reset(self):
        """Drop every listing (useful between tests)."""
        with self._lock:
            self._listings.clear()
