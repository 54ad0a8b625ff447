"""Checkout: turn a buyer's request into a persisted, stock-backed order.

Reservation and persistence form one unit: the ``PlaceOrder`` command is
processed inside the coordinator's ``reserved()`` block, so a failure to
persist releases the stock just as a failed reservation does.
"""

import json
from datetime import date, datetime

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.checkout.reservation import ReservationCoordinator
from ordering.order.access import Principal
from ordering.order.order import DeliveryMethod
from ordering.order.placement import PlaceOrder
from ordering.order.results import MutationResult

_REQUIRED_BILLING_FIELDS = ("name", "email", "phone", "address")


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def validate_checkout(billing: dict, sub_orders: list[dict]) -> None:
    """Reject malformed checkout input before any stock is touched."""
    errors: dict[str, list[str]] = {}

    missing = [field for field in _REQUIRED_BILLING_FIELDS if not (billing or {}).get(field)]
    if missing:
        errors["billing"] = [f"Missing billing fields: {', '.join(missing)}"]

    if not sub_orders:
        errors["sub_orders"] = ["At least one sub-order is required"]

    for index, sub_order in enumerate(sub_orders or []):
        prefix = f"sub_orders[{index}]"
        if not sub_order.get("seller_id"):
            errors.setdefault(prefix, []).append("Seller is required")

        method = sub_order.get("delivery_method")
        if method == DeliveryMethod.PICKUP.value:
            if sub_order.get("pickup") is None:
                errors.setdefault(prefix, []).append("Pickup delivery requires pickup info")
            if sub_order.get("third_party") is not None:
                errors.setdefault(prefix, []).append("Pickup delivery cannot carry third-party info")
        elif method == DeliveryMethod.THIRD_PARTY.value:
            if sub_order.get("third_party") is None:
                errors.setdefault(prefix, []).append("Third-party delivery requires third-party info")
            if sub_order.get("pickup") is not None:
                errors.setdefault(prefix, []).append("Third-party delivery cannot carry pickup info")
        else:
            errors.setdefault(prefix, []).append(f"Unknown delivery method: {method}")

        items = sub_order.get("items") or []
        if not items:
            errors.setdefault(prefix, []).append("At least one item is required")
        for item in items:
            if not item.get("listing_id"):
                errors.setdefault(prefix, []).append("Every item needs a listing")
            qty = item.get("qty")
            if not isinstance(qty, int) or isinstance(qty, bool) or qty < 1:
                errors.setdefault(prefix, []).append("Item quantity must be a whole number of at least 1")

    sellers = [so.get("seller_id") for so in sub_orders or []]
    if len(set(sellers)) != len(sellers):
        errors.setdefault("sub_orders", []).append("Each seller may appear in only one sub-order")

    if errors:
        raise ValidationError(errors)


def place_order(principal: Principal, billing: dict, sub_orders: list[dict], store=None) -> MutationResult:
    """Reserve stock for every item and persist the order, all or nothing.

    Args:
        principal: The buyer placing the order.
        billing: Dict with name, email, phone, address and optional city/country.
        sub_orders: One dict per seller with seller_id, delivery_method,
            pickup / third_party and items (listing_id, qty).
        store: Listing store to reserve against; the configured one by default.

    Raises:
        ValidationError: malformed input.
        ObjectNotFoundError: a listing does not exist.
        InsufficientStock: a listing cannot cover the requested quantity.
        StockConflict: a concurrent checkout took the stock first.
    """
    validate_checkout(billing, sub_orders)

    coordinator = ReservationCoordinator(store)
    with coordinator.reserved(sub_orders) as priced_sub_orders:
        command = PlaceOrder(
            buyer_id=principal.user_id,
            billing=json.dumps(billing, default=_json_default),
            sub_orders=json.dumps(priced_sub_orders, default=_json_default),
            placed_by=principal.user_id,
        )
        return current_domain.process(command, asynchronous=False)
