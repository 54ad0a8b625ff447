"""Faker-based data generators for Locust load test scenarios.

Payloads match the camelCase field names of the ordering API's Pydantic
request schemas. Listing and seller ids follow the ones written by
``python src/manage.py seed-listings``, so the target server must run with
``LISTING_STORE_ADAPTER=sql`` against the seeded database.
"""

import os
import random
import uuid
from datetime import UTC, datetime, timedelta

from faker import Faker

fake = Faker()

# Must agree with the --sellers / --per-seller flags given to seed-listings
SEEDED_SELLERS = int(os.environ.get("LOADTEST_SELLERS", "3"))
LISTINGS_PER_SELLER = int(os.environ.get("LOADTEST_LISTINGS_PER_SELLER", "5"))

ITEM_STATUSES = ["accepted", "ready", "in_transit", "delivered"]


# ---------- Principals ----------


def buyer_headers(buyer_id: str | None = None) -> dict:
    """Identity headers for a buyer, as forwarded by the gateway."""
    return {"X-User-Id": buyer_id or f"LT-BUYER-{uuid.uuid4().hex[:8]}", "X-User-Role": "buyer"}


def seller_headers(seller_id: str) -> dict:
    return {"X-User-Id": seller_id, "X-User-Role": "seller"}


def admin_headers() -> dict:
    return {"X-User-Id": "LT-ADMIN", "X-User-Role": "admin"}


# ---------- Seeded catalogue ----------


def seller_id(number: int | None = None) -> str:
    """Id of a seeded seller, random unless ``number`` is given."""
    number = number or random.randint(1, SEEDED_SELLERS)
    return f"LT-SELLER-{number:03d}"


def listings_of(seller: str) -> list[str]:
    """Seeded listing ids owned by ``seller``."""
    number = int(seller.rsplit("-", 1)[1])
    first = (number - 1) * LISTINGS_PER_SELLER + 1
    return [f"LT-LISTING-{n:04d}" for n in range(first, first + LISTINGS_PER_SELLER)]


# ---------- Ordering Domain ----------


def billing_data() -> dict:
    """Generate BillingSchema payload."""
    return {
        "name": fake.name()[:255],
        "email": fake.email(),
        "phone": fake.phone_number()[:50],
        "address": fake.street_address()[:500],
        "city": fake.city()[:100],
        "country": fake.country()[:100],
    }


def order_items(seller: str, max_items: int = 3, max_qty: int = 2) -> list[dict]:
    """Distinct seeded listings of one seller with small quantities."""
    listings = random.sample(listings_of(seller), k=min(max_items, LISTINGS_PER_SELLER))
    chosen = listings[: random.randint(1, len(listings))]
    return [{"listing": listing, "qty": random.randint(1, max_qty)} for listing in chosen]


def pickup_sub_order(seller: str) -> dict:
    slot = datetime.now(UTC) + timedelta(days=random.randint(1, 7), hours=random.randint(8, 17))
    return {
        "seller": seller,
        "deliveryMethod": "pickup",
        "pickupInfo": {
            "timeSlot": slot.replace(minute=0, second=0, microsecond=0).isoformat(),
            "location": {
                "type": "Point",
                "coordinates": [round(random.uniform(-3.0, 1.0), 4), round(random.uniform(5.0, 11.0), 4)],
            },
        },
        "items": order_items(seller),
    }


def third_party_sub_order(seller: str) -> dict:
    return {
        "seller": seller,
        "deliveryMethod": "thirdParty",
        "thirdPartyInfo": {
            "partnerOrderId": f"LT-COURIER-{fake.bothify('??####').upper()}",
            "eta": (datetime.now(UTC) + timedelta(days=random.randint(1, 3))).isoformat(),
            "cost": round(random.uniform(2.0, 15.0), 2),
        },
        "items": order_items(seller),
    }


def order_data(num_sellers: int | None = None) -> dict:
    """Generate CreateOrderRequest payload spanning one or more seeded sellers."""
    count = min(num_sellers or random.randint(1, 2), SEEDED_SELLERS)
    sellers = random.sample([seller_id(n) for n in range(1, SEEDED_SELLERS + 1)], k=count)
    sub_orders = [random.choice([pickup_sub_order, third_party_sub_order])(seller) for seller in sellers]
    return {"billing": billing_data(), "subOrders": sub_orders}


def contended_order_data(listing: str, qty: int = 1) -> dict:
    """Checkout for a single hot listing, used to provoke stock contention."""
    number = int(listing.rsplit("-", 1)[1])
    seller = seller_id((number - 1) // LISTINGS_PER_SELLER + 1)
    sub_order = pickup_sub_order(seller)
    sub_order["items"] = [{"listing": listing, "qty": qty}]
    return {"billing": billing_data(), "subOrders": [sub_order]}
