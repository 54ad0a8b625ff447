"""Status derivation for the item → sub-order → order hierarchy.

Both functions are pure: the result depends only on the multiset of
statuses passed in, never on their order or on anything outside.

The branches are evaluated top to bottom and the order is significant.
For sub-orders, any accepted/ready/in_transit item wins over the
partial-delivery rule, so ``[delivered, accepted]`` is ``in_progress``
while ``[delivered, pending]`` is ``partially_delivered``.
"""

from collections.abc import Iterable

PENDING = "pending"
ACCEPTED = "accepted"
READY = "ready"
IN_TRANSIT = "in_transit"
DELIVERED = "delivered"
CANCELLED = "cancelled"
IN_PROGRESS = "in_progress"
PARTIALLY_DELIVERED = "partially_delivered"

_ACTIVE_ITEM_STATUSES = frozenset({IN_TRANSIT, READY, ACCEPTED})


def derive_sub_order_status(item_statuses: Iterable[str]) -> str:
    """Compute a sub-order status from the statuses of its items."""
    statuses = list(item_statuses)

    if not statuses:
        return PENDING
    if all(s == DELIVERED for s in statuses):
        return DELIVERED
    if all(s == CANCELLED for s in statuses):
        return CANCELLED
    if any(s in _ACTIVE_ITEM_STATUSES for s in statuses):
        return IN_PROGRESS
    if DELIVERED in statuses:
        # all() above failed, so something other than delivered is present
        return PARTIALLY_DELIVERED
    if all(s == PENDING for s in statuses):
        return PENDING
    return IN_PROGRESS


def derive_order_status(sub_order_statuses: Iterable[str]) -> str:
    """Compute an order status from the statuses of its sub-orders."""
    statuses = list(sub_order_statuses)

    if not statuses:
        return PENDING
    if all(s == DELIVERED for s in statuses):
        return DELIVERED
    if all(s == CANCELLED for s in statuses):
        return CANCELLED
    if DELIVERED in statuses:
        return PARTIALLY_DELIVERED
    if all(s == PENDING for s in statuses):
        return PENDING
    return IN_PROGRESS
