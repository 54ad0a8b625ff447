"""Entry points for mutating existing orders.

Each call holds the order's lock around the whole command, so concurrent
updates to different items or sub-orders of the same order are applied
one after the other instead of overwriting each other.
"""

from protean.utils.globals import current_domain

from ordering.order.access import Principal
from ordering.order.deletion import DeleteOrder
from ordering.order.locks import order_lock
from ordering.order.results import MutationResult
from ordering.order.status_updates import (
    ClearOrderStatusOverride,
    OverrideOrderStatus,
    UpdateItemStatus,
    UpdateSubOrderStatus,
)


def _actor(principal: Principal) -> dict:
    return {
        "actor_id": principal.user_id,
        "actor_role": principal.role,
        "actor_is_admin": principal.is_admin,
    }


def update_item_status(principal: Principal, order_id, sub_order_id, item_id, item_status) -> MutationResult:
    command = UpdateItemStatus(
        order_id=order_id,
        sub_order_id=sub_order_id,
        item_id=item_id,
        item_status=item_status,
        **_actor(principal),
    )
    with order_lock(order_id):
        return current_domain.process(command, asynchronous=False)


def update_sub_order_status(
    principal: Principal, order_id, sub_order_id, status, item_status=None
) -> MutationResult:
    command = UpdateSubOrderStatus(
        order_id=order_id,
        sub_order_id=sub_order_id,
        status=status,
        item_status=item_status,
        **_actor(principal),
    )
    with order_lock(order_id):
        return current_domain.process(command, asynchronous=False)


def update_order_status(principal: Principal, order_id, status) -> MutationResult:
    """Set the admin override, or clear it when ``status`` is None."""
    if status is None:
        command = ClearOrderStatusOverride(order_id=order_id, **_actor(principal))
    else:
        command = OverrideOrderStatus(order_id=order_id, status=status, **_actor(principal))
    with order_lock(order_id):
        return current_domain.process(command, asynchronous=False)


def delete_order(principal: Principal, order_id) -> MutationResult:
    with order_lock(order_id):
        return current_domain.process(DeleteOrder(order_id=order_id, **_actor(principal)), asynchronous=False)
