"""Domain events for the Order aggregate.

Each event carries a JSON snapshot of the order (or of one sub-order) as it
stood when the event was raised, so consumers never have to read back.
"""

from protean.fields import DateTime, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A checkout succeeded and the order was persisted."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    order = Text(required=True)  # JSON snapshot
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class SubOrderPlaced:
    """One seller's slice of a freshly placed order."""

    __version__ = 1

    order_id = Identifier(required=True)
    sub_order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    sub_order = Text(required=True)  # JSON snapshot
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_by = Identifier()
    order = Text(required=True)  # JSON snapshot
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class SubOrderStatusChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    sub_order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_by = Identifier()
    sub_order = Text(required=True)  # JSON snapshot
    changed_at = DateTime(required=True)
