"""Both listing store adapters honour the same compare-and-swap contract."""

import pytest
from catalogue.listing import get_listing_store, reset_listing_store
from catalogue.listing.memory_store import InMemoryListingStore
from catalogue.listing.port import Listing
from catalogue.listing.sql_store import SQLListingStore


def _seed():
    return [
        Listing(id="L1", seller_id="seller-a", product_name="Tomatoes", price=10.0, quantity=5),
        Listing(id="L2", seller_id="seller-a", product_name="Okra", price=3.0, quantity=0, is_active=False),
    ]


@pytest.fixture(params=["memory", "sql"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryListingStore(_seed())

    sql_store = SQLListingStore(f"sqlite:///{tmp_path / 'listings.db'}")
    for listing in _seed():
        sql_store.upsert(listing)
    return sql_store


class TestListingStoreContract:
    def test_find_by_id(self, store):
        listing = store.find_by_id("L1")

        assert listing == Listing(id="L1", seller_id="seller-a", product_name="Tomatoes", price=10.0, quantity=5)

    def test_find_unknown_returns_none(self, store):
        assert store.find_by_id("nope") is None

    def test_inactive_flag_round_trips(self, store):
        assert store.find_by_id("L2").is_active is False

    def test_reserve_within_stock(self, store):
        assert store.reserve_quantity("L1", 3) is True
        assert store.find_by_id("L1").quantity == 2

    def test_reserve_all_remaining_stock(self, store):
        assert store.reserve_quantity("L1", 5) is True
        assert store.find_by_id("L1").quantity == 0

    def test_reserve_beyond_stock_is_refused_and_changes_nothing(self, store):
        assert store.reserve_quantity("L1", 6) is False
        assert store.find_by_id("L1").quantity == 5

    def test_reserve_unknown_listing_is_refused(self, store):
        assert store.reserve_quantity("nope", 1) is False

    def test_release_gives_stock_back(self, store):
        store.reserve_quantity("L1", 4)
        store.release_quantity("L1", 4)

        assert store.find_by_id("L1").quantity == 5

    def test_upsert_replaces_existing_listing(self, store):
        store.upsert(Listing(id="L1", seller_id="seller-a", product_name="Tomatoes", price=12.5, quantity=9))

        listing = store.find_by_id("L1")
        assert (listing.price, listing.quantity) == (12.5, 9)


class TestSQLListingStoreSchema:
    def test_drop_and_recreate_schema(self, tmp_path):
        store = SQLListingStore(f"sqlite:///{tmp_path / 'schema.db'}")
        store.upsert(_seed()[0])

        store.drop_schema()
        store.create_schema()

        assert store.find_by_id("L1") is None


class TestListingStoreRegistry:
    def test_memory_is_the_default(self, monkeypatch):
        monkeypatch.delenv("LISTING_STORE_ADAPTER", raising=False)
        reset_listing_store()

        assert isinstance(get_listing_store(), InMemoryListingStore)
        assert get_listing_store() is get_listing_store()

    def test_sql_adapter_uses_configured_uri(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LISTING_STORE_ADAPTER", "sql")
        monkeypatch.setenv("LISTING_STORE_DATABASE_URI", f"sqlite:///{tmp_path / 'env.db'}")
        reset_listing_store()

        assert isinstance(get_listing_store(), SQLListingStore)

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("LISTING_STORE_ADAPTER", "spreadsheet")
        reset_listing_store()

        with pytest.raises(ValueError):
            get_listing_store()
