"""Reservation Coordinator: all-or-nothing stock reservation for one checkout.

For every item of every requested sub-order, in the order given:

1. look the listing up (missing or inactive → ObjectNotFoundError)
2. check it belongs to the sub-order's seller (ValidationError otherwise)
3. compare the requested quantity with what is available (InsufficientStock)
4. capture the price and attempt the conditional decrement (refused → StockConflict)

Every applied decrement is written to a ledger. If anything inside the
``reserved()`` block raises, including persisting the order afterwards,
the ledger is replayed backwards as compensating releases before the
error propagates.
A listing store that fails outright surfaces as ``Internal``.
"""

from contextlib import contextmanager
from dataclasses import dataclass

import structlog
from catalogue.listing import get_listing_store
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import InsufficientStock, Internal, StockConflict

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ReservedItem:
    listing_id: str
    product_name: str
    qty: int
    price_at_order: float

    def to_dict(self) -> dict:
        return {
            "listing_id": self.listing_id,
            "product_name": self.product_name,
            "qty": self.qty,
            "price_at_order": self.price_at_order,
        }


class Reservation:
    """Ledger of decrements applied so far within one checkout."""

    def __init__(self, store):
        self.store = store
        self._ledger: list[tuple[str, int]] = []

    @property
    def reserved(self) -> list[tuple[str, int]]:
        return list(self._ledger)

    def _call_store(self, operation: str, *args):
        try:
            return getattr(self.store, operation)(*args)
        except Exception as exc:
            logger.error("Listing store failed", operation=operation, exc_info=exc)
            raise Internal("Listing store unavailable") from exc

    def reserve(self, listing_id: str, qty: int, seller_id: str) -> ReservedItem:
        listing = self._call_store("find_by_id", listing_id)
        if listing is None or not listing.is_active:
            raise ObjectNotFoundError({"listing": [f"Listing {listing_id} not found"]})

        if str(listing.seller_id) != str(seller_id):
            raise ValidationError({"listing": [f"Listing {listing_id} is not sold by seller {seller_id}"]})

        if qty > listing.quantity:
            logger.info(
                "Reservation refused: insufficient stock",
                listing_id=listing.id,
                available=listing.quantity,
                requested=qty,
            )
            raise InsufficientStock(listing.product_name, listing.quantity, qty, listing_id=listing.id)

        if not self._call_store("reserve_quantity", listing.id, qty):
            logger.info("Reservation refused: stock changed concurrently", listing_id=listing.id, requested=qty)
            raise StockConflict(listing.id)

        self._ledger.append((listing.id, qty))
        return ReservedItem(
            listing_id=listing.id,
            product_name=listing.product_name,
            qty=qty,
            price_at_order=listing.price,
        )

    def rollback(self) -> None:
        """Release every decrement in reverse order."""
        released = 0
        while self._ledger:
            listing_id, qty = self._ledger.pop()
            try:
                self.store.release_quantity(listing_id, qty)
                released += 1
            except Exception:
                logger.exception("Failed to release reserved stock", listing_id=listing_id, qty=qty)
        if released:
            logger.warning("Checkout rolled back", released=released)

    def commit(self) -> None:
        self._ledger.clear()


class ReservationCoordinator:
    def __init__(self, store=None):
        self.store = store or get_listing_store()

    def _price_sub_orders(self, reservation: Reservation, sub_order_requests: list[dict]) -> list[dict]:
        priced = []
        for request in sub_order_requests:
            items = [
                reservation.reserve(item["listing_id"], item["qty"], request["seller_id"]).to_dict()
                for item in request["items"]
            ]
            priced.append({**request, "items": items})
        return priced

    @contextmanager
    def reserved(self, sub_order_requests: list[dict]):
        """Reserve stock for every item and yield the priced sub-orders.

        Leaving the block normally keeps the decrements; leaving it with an
        exception releases all of them and re-raises.
        """
        reservation = Reservation(self.store)
        try:
            yield self._price_sub_orders(reservation, sub_order_requests)
        except Exception:
            reservation.rollback()
            raise
        reservation.commit()
