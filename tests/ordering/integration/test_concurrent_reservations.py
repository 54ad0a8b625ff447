"""Concurrent checkouts never oversell and never leave partial reservations."""

import threading

import pytest
from catalogue.listing.memory_store import InMemoryListingStore
from catalogue.listing.port import Listing
from catalogue.listing.sql_store import SQLListingStore
from ordering.checkout.reservation import ReservationCoordinator
from ordering.errors import InsufficientStock, StockConflict

THREADS = 16


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path):
    listings = [
        Listing(id="TOM", seller_id="seller-a", product_name="Tomatoes", price=10.0, quantity=5),
        Listing(id="EGG", seller_id="seller-a", product_name="Eggs", price=0.5, quantity=3),
    ]
    if request.param == "memory":
        return InMemoryListingStore(listings)

    sql_store = SQLListingStore(f"sqlite:///{tmp_path / 'race.db'}")
    for listing in listings:
        sql_store.upsert(listing)
    return sql_store


def _race(store, items):
    """Run THREADS identical checkouts at once; return how many succeeded."""
    barrier = threading.Barrier(THREADS)
    outcomes = []
    guard = threading.Lock()

    def _checkout():
        barrier.wait()
        try:
            with ReservationCoordinator(store).reserved([{"seller_id": "seller-a", "items": items}]):
                pass
            outcome = "ok"
        except (InsufficientStock, StockConflict) as exc:
            outcome = type(exc).__name__
        with guard:
            outcomes.append(outcome)

    threads = [threading.Thread(target=_checkout) for _ in range(THREADS)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert len(outcomes) == THREADS
    return outcomes.count("ok")


class TestConcurrentReservations:
    def test_single_listing_is_never_oversold(self, store):
        succeeded = _race(store, [{"listing_id": "TOM", "qty": 1}])

        assert succeeded == 5
        assert store.find_by_id("TOM").quantity == 0

    def test_multi_item_checkouts_are_all_or_nothing(self, store):
        succeeded = _race(store, [{"listing_id": "TOM", "qty": 1}, {"listing_id": "EGG", "qty": 1}])

        # Eggs run out first; every losing checkout must have given its tomato back
        assert succeeded == 3
        assert store.find_by_id("EGG").quantity == 0
        assert store.find_by_id("TOM").quantity == 5 - succeeded

    def test_large_requests_cannot_both_win(self, store):
        succeeded = _race(store, [{"listing_id": "TOM", "qty": 3}])

        assert succeeded == 1
        assert store.find_by_id("TOM").quantity == 2
