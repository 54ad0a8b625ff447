"""Read side for orders: visibility-filtered lookups and populated views.

Views are built from the persisted snapshot and enriched with listing
detail from the listing store. When a listing has since disappeared, the
item still renders from what was captured at checkout.
"""

from catalogue.listing import get_listing_store
from protean.utils.globals import current_domain

from ordering.order.access import Principal, can_view, ensure_can_view
from ordering.order.order import Order


class _ListingLookup:
    """Memoised listing lookups for the duration of one read."""

    def __init__(self, store):
        self.store = store
        self._cache = {}

    def __call__(self, listing_id):
        if listing_id not in self._cache:
            self._cache[listing_id] = self.store.find_by_id(listing_id)
        return self._cache[listing_id]


def _populate_item(item: dict, lookup: _ListingLookup) -> dict:
    listing = lookup(item["listingId"])
    return {
        "id": item["id"],
        "listing": {
            "id": item["listingId"],
            "productName": listing.product_name if listing else item["productName"],
            "price": listing.price if listing else None,
            "sellerId": listing.seller_id if listing else None,
        },
        "qty": item["qty"],
        "priceAtOrder": item["priceAtOrder"],
        "lineTotal": round(item["qty"] * item["priceAtOrder"], 2),
        "itemStatus": item["itemStatus"],
    }


def _populate_sub_order(sub_order: dict, lookup: _ListingLookup) -> dict:
    return {
        "id": sub_order["id"],
        "seller": {"id": sub_order["sellerId"]},
        "deliveryMethod": sub_order["deliveryMethod"],
        "pickupInfo": sub_order["pickupInfo"],
        "thirdPartyInfo": sub_order["thirdPartyInfo"],
        "subtotal": sub_order["subtotal"],
        "status": sub_order["status"],
        "items": [_populate_item(item, lookup) for item in sub_order["items"]],
    }


def populate(order: Order, store=None) -> dict:
    """Full order view with buyer and listing display data."""
    lookup = _ListingLookup(store or get_listing_store())
    snapshot = order.snapshot()
    billing = snapshot["billing"]
    return {
        "id": snapshot["id"],
        "buyer": {"id": snapshot["buyerId"], "name": billing["name"], "email": billing["email"]},
        "billing": billing,
        "subOrders": [_populate_sub_order(so, lookup) for so in snapshot["subOrders"]],
        "grandTotal": snapshot["grandTotal"],
        "status": snapshot["status"],
        "derivedStatus": snapshot["derivedStatus"],
        "statusOverride": snapshot["statusOverride"],
        "lastUpdatedBy": snapshot["lastUpdatedBy"],
        "createdAt": snapshot["createdAt"],
        "updatedAt": snapshot["updatedAt"],
    }


def get_order(order_id, principal: Principal, store=None) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    ensure_can_view(principal, order)
    return populate(order, store)


def list_orders(principal: Principal, store=None) -> list[dict]:
    """Whole orders visible to the principal, newest first.

    Sellers receive complete orders, other sellers' sub-orders included;
    ``list_seller_sub_orders`` is the pruned alternative.
    """
    repo = current_domain.repository_for(Order)
    if principal.admin:
        orders = repo.find_all()
    elif principal.seller:
        orders = repo.find_by_seller(principal.user_id)
    else:
        orders = repo.find_by_buyer(principal.user_id)

    store = store or get_listing_store()
    return [populate(order, store) for order in orders if can_view(principal, order)]


def list_seller_sub_orders(seller_id, store=None) -> list[dict]:
    """Per-order projection holding only ``seller_id``'s sub-orders plus buyer contact."""
    lookup = _ListingLookup(store or get_listing_store())
    views = []
    for order in current_domain.repository_for(Order).find_by_seller(seller_id):
        snapshot = order.snapshot()
        own = [so for so in snapshot["subOrders"] if so["sellerId"] == str(seller_id)]
        if not own:
            continue
        billing = snapshot["billing"]
        views.append(
            {
                "orderId": snapshot["id"],
                "buyer": {
                    "id": snapshot["buyerId"],
                    "name": billing["name"],
                    "email": billing["email"],
                    "phone": billing["phone"],
                },
                "subOrders": [_populate_sub_order(so, lookup) for so in own],
                "createdAt": snapshot["createdAt"],
            }
        )
    return views
