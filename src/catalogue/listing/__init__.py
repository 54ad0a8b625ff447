"""Listing store abstraction: the slice of the catalogue that checkout needs."""

import os

_store_instance = None


def get_listing_store():
    """Return the configured listing store (singleton).

    Uses the in-memory store by default. Set LISTING_STORE_ADAPTER=sql and
    LISTING_STORE_DATABASE_URI to keep listings in a relational database.
    """
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("LISTING_STORE_ADAPTER", "memory")
        if adapter == "memory":
            from catalogue.listing.memory_store import InMemoryListingStore

            _store_instance = InMemoryListingStore()
        elif adapter == "sql":
            from catalogue.listing.sql_store import SQLListingStore

            _store_instance = SQLListingStore(
                os.environ.get("LISTING_STORE_DATABASE_URI", "sqlite:///harvestlane_listings.db")
            )
        else:
            raise ValueError(f"Unknown listing store adapter: {adapter}")
    return _store_instance


def set_listing_store(store):
    """Install a specific store instance (tests, scripts)."""
    global _store_instance
    _store_instance = store


def reset_listing_store():
    """Reset the listing store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
