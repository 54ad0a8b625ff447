"""Order placement: command and handler.

The command carries sub-orders that are already priced and reserved; stock
reservation happens before the command is processed (see
``ordering.checkout.placement``).
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.results import MutationResult

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    billing = Text(required=True)  # JSON: billing dict
    sub_orders = Text(required=True)  # JSON: list of priced sub-order dicts
    placed_by = Identifier()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        billing = json.loads(command.billing) if isinstance(command.billing, str) else command.billing
        sub_orders = json.loads(command.sub_orders) if isinstance(command.sub_orders, str) else command.sub_orders

        order = Order.place(
            buyer_id=command.buyer_id,
            billing=billing,
            sub_orders_data=sub_orders,
            placed_by=command.placed_by,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            buyer_id=str(order.buyer_id),
            sub_orders=len(order.sub_orders),
            grand_total=order.grand_total,
        )
        return MutationResult(order=order, before=None, after=order.snapshot(), order_id=str(order.id))
