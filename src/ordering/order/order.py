"""Order aggregate: one buyer checkout split into per-seller sub-orders.

The aggregate owns two flat collections instead of a nested tree:
``sub_orders`` and ``items``. Every item carries the id of the sub-order it
belongs to, so a sub-order's items are simply the order's items filtered by
``sub_order_id``. All mutation goes through the aggregate.

Status is layered:

    item_status (set by sellers/admins)
        → SubOrder.status   (derived, or set directly by a sub-order update)
            → Order.derived_status (always derived from sub-orders)
                → Order.status = status_override or derived_status

Only admins touch ``status_override``; clearing it hands control back to
the derivation, which has been kept current the whole time.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import (
    OrderPlaced,
    OrderStatusChanged,
    SubOrderPlaced,
    SubOrderStatusChanged,
)
from ordering.order.status import derive_order_status, derive_sub_order_status


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    PARTIALLY_DELIVERED = "partially_delivered"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class SubOrderStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    READY = "ready"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    IN_PROGRESS = "in_progress"
    PARTIALLY_DELIVERED = "partially_delivered"


class ItemStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    READY = "ready"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class DeliveryMethod(Enum):
    PICKUP = "pickup"
    THIRD_PARTY = "thirdParty"


def _coerce(enum_cls, value, field_name):
    """Return the enum's string value, or raise ValidationError naming the field."""
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError({field_name: [f"'{value}' is not a valid choice. Allowed: {allowed}"]}) from None


def _iso(value):
    return value.isoformat() if value is not None else None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class BillingSnapshot:
    """Contact and address details captured at checkout.

    Never re-synced from the buyer's live profile.
    """

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=50)
    address = String(required=True, max_length=500)
    city = String(max_length=100)
    country = String(max_length=100)


@ordering.value_object(part_of="Order")
class PickupInfo:
    """Where and when the buyer collects the goods from the seller."""

    time_slot = DateTime(required=True)
    longitude = Float(min_value=-180.0, max_value=180.0)
    latitude = Float(min_value=-90.0, max_value=90.0)


@ordering.value_object(part_of="Order")
class ThirdPartyInfo:
    """Hand-off details for a third-party delivery partner."""

    partner_order_id = String(max_length=255)
    eta = DateTime()
    cost = Float(min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order", limit=None)
class OrderItem:
    """A quantity of one listing at its checkout-time price."""

    sub_order_id = Identifier(required=True)
    listing_id = Identifier(required=True)
    product_name = String(max_length=255)
    qty = Integer(required=True, min_value=1)
    price_at_order = Float(required=True, min_value=0.0)
    item_status = String(choices=ItemStatus, default=ItemStatus.PENDING.value)
    position = Integer(default=0)

    @property
    def line_total(self):
        return round(self.qty * self.price_at_order, 2)


@ordering.entity(part_of="Order", limit=None)
class SubOrder:
    """One seller's slice of an order; the unit of fulfilment."""

    seller_id = Identifier(required=True)
    delivery_method = String(required=True, choices=DeliveryMethod)
    pickup = ValueObject(PickupInfo)
    third_party = ValueObject(ThirdPartyInfo)
    subtotal = Float(default=0.0)
    status = String(choices=SubOrderStatus, default=SubOrderStatus.PENDING.value)
    position = Integer(default=0)

    @invariant.post
    def delivery_info_must_match_method(self):
        if self.delivery_method == DeliveryMethod.PICKUP.value and self.third_party is not None:
            raise ValidationError({"third_party_info": ["Third-party details are not allowed for pickup delivery"]})
        if self.delivery_method == DeliveryMethod.THIRD_PARTY.value and self.pickup is not None:
            raise ValidationError({"pickup_info": ["Pickup details are not allowed for third-party delivery"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate(limit=None)
class Order:
    buyer_id = Identifier(required=True)
    billing = ValueObject(BillingSnapshot, required=True)
    sub_orders = HasMany(SubOrder)
    items = HasMany(OrderItem)
    grand_total = Float(default=0.0)
    derived_status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    status_override = String(choices=OrderStatus)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    seller_index = Text()  # "|seller-a|seller-b|" for contains-lookups
    last_updated_by = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, buyer_id, billing, sub_orders_data, placed_by=None):
        """Build a fully priced order from reserved checkout data.

        Args:
            buyer_id: The purchasing principal.
            billing: Dict with name, email, phone, address, city, country.
            sub_orders_data: List of dicts, one per seller, with seller_id,
                delivery_method, pickup (dict or None), third_party (dict or
                None) and items (list of dicts with listing_id, product_name,
                qty, price_at_order).
            placed_by: Principal recorded as last_updated_by; defaults to the buyer.
        """
        if not sub_orders_data:
            raise ValidationError({"sub_orders": ["An order needs at least one sub-order"]})

        sellers = [str(data["seller_id"]) for data in sub_orders_data]
        if len(set(sellers)) != len(sellers):
            raise ValidationError({"sub_orders": ["Each seller may appear in only one sub-order"]})

        now = datetime.now(UTC)
        order = cls(
            buyer_id=buyer_id,
            billing=BillingSnapshot(**billing),
            last_updated_by=placed_by or buyer_id,
            seller_index="|" + "|".join(sellers) + "|",
            created_at=now,
            updated_at=now,
        )

        for position, data in enumerate(sub_orders_data):
            items_data = data.get("items") or []
            if not items_data:
                raise ValidationError({"items": [f"Sub-order for seller {data['seller_id']} has no items"]})

            pickup = data.get("pickup")
            third_party = data.get("third_party")
            sub_order = SubOrder(
                seller_id=data["seller_id"],
                delivery_method=_coerce(DeliveryMethod, data.get("delivery_method"), "delivery_method"),
                pickup=PickupInfo(**pickup) if pickup else None,
                third_party=ThirdPartyInfo(**third_party) if third_party else None,
                subtotal=round(sum(i["qty"] * i["price_at_order"] for i in items_data), 2),
                status=derive_sub_order_status(ItemStatus.PENDING.value for _ in items_data),
                position=position,
            )
            order.add_sub_orders(sub_order)

            for item_position, item_data in enumerate(items_data):
                order.add_items(
                    OrderItem(
                        sub_order_id=str(sub_order.id),
                        listing_id=item_data["listing_id"],
                        product_name=item_data.get("product_name"),
                        qty=item_data["qty"],
                        price_at_order=item_data["price_at_order"],
                        position=item_position,
                    )
                )

        order.grand_total = round(sum(so.subtotal for so in order.sub_orders), 2)
        order._refresh_status()

        snapshot = order.snapshot()
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(order.buyer_id),
                order=json.dumps(snapshot),
                placed_at=now,
            )
        )
        for sub_order_snapshot in snapshot["subOrders"]:
            order.raise_(
                SubOrderPlaced(
                    order_id=str(order.id),
                    sub_order_id=sub_order_snapshot["id"],
                    seller_id=sub_order_snapshot["sellerId"],
                    buyer_id=str(order.buyer_id),
                    sub_order=json.dumps(sub_order_snapshot),
                    placed_at=now,
                )
            )
        return order

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def ordered_sub_orders(self):
        return sorted(self.sub_orders, key=lambda so: so.position or 0)

    def get_sub_order(self, sub_order_id):
        sub_order = next((so for so in self.sub_orders if str(so.id) == str(sub_order_id)), None)
        if sub_order is None:
            raise ObjectNotFoundError({"_entity": f"SubOrder {sub_order_id} not found in order {self.id}"})
        return sub_order

    def items_of(self, sub_order_id):
        return sorted(
            (item for item in self.items if str(item.sub_order_id) == str(sub_order_id)),
            key=lambda item: item.position or 0,
        )

    def get_item(self, sub_order_id, item_id):
        item = next((i for i in self.items_of(sub_order_id) if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError({"_entity": f"Item {item_id} not found in sub-order {sub_order_id}"})
        return item

    def seller_ids(self):
        return [str(so.seller_id) for so in self.ordered_sub_orders()]

    # -------------------------------------------------------------------
    # Status mutations
    # -------------------------------------------------------------------
    def update_item_status(self, sub_order_id, item_id, item_status, updated_by):
        """Set one item's status, then re-derive its sub-order and the order."""
        item_status = _coerce(ItemStatus, item_status, "item_status")
        sub_order = self.get_sub_order(sub_order_id)
        item = self.get_item(sub_order_id, item_id)

        previous_order_status = self.status
        previous_sub_order_status = sub_order.status

        item.item_status = item_status
        sub_order.status = derive_sub_order_status(i.item_status for i in self.items_of(sub_order_id))
        self._refresh_status()
        self._touch(updated_by)

        self._raise_status_changes(previous_order_status, sub_order, previous_sub_order_status, updated_by)

    def update_sub_order_status(self, sub_order_id, status, updated_by, item_status=None):
        """Set a sub-order's status directly, optionally stamping every item too.

        The direct value stands until the next item-level change re-derives it.
        """
        status = _coerce(SubOrderStatus, status, "status")
        if item_status is not None:
            item_status = _coerce(ItemStatus, item_status, "item_status")
        sub_order = self.get_sub_order(sub_order_id)

        previous_order_status = self.status
        previous_sub_order_status = sub_order.status

        if item_status is not None:
            for item in self.items_of(sub_order_id):
                item.item_status = item_status
        sub_order.status = status
        self._refresh_status()
        self._touch(updated_by)

        self._raise_status_changes(previous_order_status, sub_order, previous_sub_order_status, updated_by)

    def override_status(self, status, updated_by):
        """Admin override of the order status, layered on top of the derivation."""
        status = _coerce(OrderStatus, status, "status")
        previous_order_status = self.status

        self.status_override = status
        self._refresh_status()
        self._touch(updated_by)

        self._raise_status_changes(previous_order_status, None, None, updated_by)

    def clear_status_override(self, updated_by):
        previous_order_status = self.status

        self.status_override = None
        self._refresh_status()
        self._touch(updated_by)

        self._raise_status_changes(previous_order_status, None, None, updated_by)

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _refresh_status(self):
        self.derived_status = derive_order_status(so.status for so in self.sub_orders)
        self.status = self.status_override or self.derived_status

    def _touch(self, updated_by):
        self.last_updated_by = updated_by
        self.updated_at = datetime.now(UTC)

    def _raise_status_changes(self, previous_order_status, sub_order, previous_sub_order_status, changed_by):
        if sub_order is not None:
            self.raise_(
                SubOrderStatusChanged(
                    order_id=str(self.id),
                    sub_order_id=str(sub_order.id),
                    seller_id=str(sub_order.seller_id),
                    previous_status=previous_sub_order_status,
                    status=sub_order.status,
                    changed_by=changed_by,
                    sub_order=json.dumps(self.sub_order_snapshot(sub_order)),
                    changed_at=self.updated_at,
                )
            )
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                previous_status=previous_order_status,
                status=self.status,
                changed_by=changed_by,
                order=json.dumps(self.snapshot()),
                changed_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------
    def sub_order_snapshot(self, sub_order):
        pickup = None
        if sub_order.pickup is not None:
            pickup = {"timeSlot": _iso(sub_order.pickup.time_slot), "location": None}
            if sub_order.pickup.longitude is not None and sub_order.pickup.latitude is not None:
                pickup["location"] = {
                    "type": "Point",
                    "coordinates": [sub_order.pickup.longitude, sub_order.pickup.latitude],
                }

        third_party = None
        if sub_order.third_party is not None:
            third_party = {
                "partnerOrderId": sub_order.third_party.partner_order_id,
                "eta": _iso(sub_order.third_party.eta),
                "cost": sub_order.third_party.cost,
            }

        return {
            "id": str(sub_order.id),
            "sellerId": str(sub_order.seller_id),
            "deliveryMethod": sub_order.delivery_method,
            "pickupInfo": pickup,
            "thirdPartyInfo": third_party,
            "subtotal": sub_order.subtotal,
            "status": sub_order.status,
            "items": [
                {
                    "id": str(item.id),
                    "listingId": str(item.listing_id),
                    "productName": item.product_name,
                    "qty": item.qty,
                    "priceAtOrder": item.price_at_order,
                    "itemStatus": item.item_status,
                }
                for item in self.items_of(sub_order.id)
            ],
        }

    def snapshot(self):
        """Plain-dict picture of the persisted order, used for events and audit."""
        return {
            "id": str(self.id),
            "buyerId": str(self.buyer_id),
            "billing": {
                "name": self.billing.name,
                "email": self.billing.email,
                "phone": self.billing.phone,
                "address": self.billing.address,
                "city": self.billing.city,
                "country": self.billing.country,
            },
            "subOrders": [self.sub_order_snapshot(so) for so in self.ordered_sub_orders()],
            "grandTotal": self.grand_total,
            "status": self.status,
            "derivedStatus": self.derived_status,
            "statusOverride": self.status_override,
            "lastUpdatedBy": str(self.last_updated_by) if self.last_updated_by else None,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }
