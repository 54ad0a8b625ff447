import pytest
from catalogue.listing import set_listing_store
from catalogue.listing.memory_store import InMemoryListingStore
from catalogue.listing.port import Listing
from ordering.checkout.placement import place_order
from ordering.order.access import Principal
from protean.integrations.pytest import DomainFixture

SELLER_A = "seller-a"
SELLER_B = "seller-b"


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Principals
# ---------------------------------------------------------------------------
@pytest.fixture()
def buyer():
    return Principal(user_id="buyer-001")


@pytest.fixture()
def other_buyer():
    return Principal(user_id="buyer-002")


@pytest.fixture()
def seller_a():
    return Principal(user_id=SELLER_A, role="seller")


@pytest.fixture()
def seller_b():
    return Principal(user_id=SELLER_B, role="seller")


@pytest.fixture()
def admin():
    return Principal(user_id="admin-001", role="admin")


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
@pytest.fixture()
def listing_store():
    """Seeded store installed as the process-wide listing store."""
    store = InMemoryListingStore(
        [
            Listing(id="L1", seller_id=SELLER_A, product_name="Tomatoes", price=10.0, quantity=5),
            Listing(id="L2", seller_id=SELLER_A, product_name="Onions", price=2.5, quantity=100),
            Listing(id="L3", seller_id=SELLER_B, product_name="Yams", price=4.0, quantity=20),
            Listing(id="L4", seller_id=SELLER_B, product_name="Plantain", price=3.0, quantity=1),
            Listing(id="L5", seller_id=SELLER_B, product_name="Cassava", price=1.0, quantity=10, is_active=False),
        ]
    )
    set_listing_store(store)
    return store


# ---------------------------------------------------------------------------
# Checkout input
# ---------------------------------------------------------------------------
@pytest.fixture()
def billing():
    return {
        "name": "Ama Mensah",
        "email": "ama@example.com",
        "phone": "+233 20 000 0000",
        "address": "12 Market Road",
        "city": "Kumasi",
        "country": "Ghana",
    }


@pytest.fixture()
def pickup_sub_order():
    def _make(seller_id=SELLER_A, items=(("L1", 2),)):
        return {
            "seller_id": seller_id,
            "delivery_method": "pickup",
            "pickup": {"time_slot": "2026-05-01T09:00:00+00:00", "longitude": -1.62, "latitude": 6.69},
            "third_party": None,
            "items": [{"listing_id": listing_id, "qty": qty} for listing_id, qty in items],
        }

    return _make


@pytest.fixture()
def third_party_sub_order():
    def _make(seller_id=SELLER_B, items=(("L3", 1),)):
        return {
            "seller_id": seller_id,
            "delivery_method": "thirdParty",
            "pickup": None,
            "third_party": {"partner_order_id": "GLV-881", "eta": "2026-05-02T15:00:00+00:00", "cost": 6.5},
            "items": [{"listing_id": listing_id, "qty": qty} for listing_id, qty in items],
        }

    return _make


@pytest.fixture()
def place(buyer, billing, listing_store, pickup_sub_order):
    """Place an order through checkout; defaults to 2 x L1 from seller A."""

    def _place(*sub_orders, principal=None):
        return place_order(principal or buyer, billing, list(sub_orders) or [pickup_sub_order()])

    return _place


@pytest.fixture()
def two_seller_order(place, pickup_sub_order, third_party_sub_order):
    """Seller A: 2 x L1 and 4 x L2 (pickup). Seller B: 1 x L3 (third party)."""
    result = place(
        pickup_sub_order(items=(("L1", 2), ("L2", 4))),
        third_party_sub_order(),
    )
    return result.order
