"""Order event emitter: forwards order events to notification channels.

Runs after the unit of work has committed. Delivery is best effort: any
failure is logged here and never reaches the caller that placed or
updated the order.
"""

import functools
import json

import structlog
from notifications.dispatch import dispatch
from notifications.rooms import buyer_room, seller_room
from notifications.types import NotificationType
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.order.events import (
    OrderPlaced,
    OrderStatusChanged,
    SubOrderPlaced,
    SubOrderStatusChanged,
)
from ordering.order.order import Order

logger = structlog.get_logger(__name__)


def best_effort(event_name: str):
    """Log and swallow any failure of the wrapped event handler method."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, event):
            try:
                fn(self, event)
            except Exception:
                logger.exception("Order notification failed", event=event_name, order_id=str(event.order_id))

        return wrapper

    return decorator


@ordering.event_handler(part_of=Order)
class OrderNotificationsHandler:
    """Emails the buyer and pushes to buyer/seller rooms on order events."""

    @handle(OrderPlaced)
    @best_effort("order.created")
    def on_order_placed(self, event: OrderPlaced) -> None:
        order = json.loads(event.order)
        dispatch(
            NotificationType.ORDER_PLACED.value,
            order,
            email_to=order["billing"]["email"],
            room=buyer_room(event.buyer_id),
        )

    @handle(SubOrderPlaced)
    @best_effort("suborder.created")
    def on_sub_order_placed(self, event: SubOrderPlaced) -> None:
        sub_order = {**json.loads(event.sub_order), "orderId": str(event.order_id)}
        dispatch(
            NotificationType.SUB_ORDER_PLACED.value,
            sub_order,
            room=seller_room(event.seller_id),
        )

    @handle(OrderStatusChanged)
    @best_effort("order.statusChanged")
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        order = json.loads(event.order)
        dispatch(
            NotificationType.ORDER_STATUS_CHANGED.value,
            order,
            email_to=order["billing"]["email"],
            room=buyer_room(event.buyer_id),
        )

    @handle(SubOrderStatusChanged)
    @best_effort("suborder.statusChanged")
    def on_sub_order_status_changed(self, event: SubOrderStatusChanged) -> None:
        sub_order = {**json.loads(event.sub_order), "orderId": str(event.order_id)}
        dispatch(
            NotificationType.SUB_ORDER_STATUS_CHANGED.value,
            sub_order,
            room=seller_room(event.seller_id),
        )
