"""Status updates on existing orders: commands and handler.

Every command carries the acting principal; the handler enforces the
access rules before touching the aggregate and hands back before/after
snapshots for the audit trail.
"""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.access import (
    Principal,
    ensure_admin,
    ensure_can_manage_sub_order,
)
from ordering.order.order import Order
from ordering.order.results import MutationResult

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateItemStatus:
    order_id = Identifier(required=True)
    sub_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    item_status = String(required=True, max_length=50)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    actor_is_admin = Boolean(default=False)


@ordering.command(part_of="Order")
class UpdateSubOrderStatus:
    order_id = Identifier(required=True)
    sub_order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    item_status = String(max_length=50)  # Optional: stamp every item too
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    actor_is_admin = Boolean(default=False)


@ordering.command(part_of="Order")
class OverrideOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    actor_is_admin = Boolean(default=False)


@ordering.command(part_of="Order")
class ClearOrderStatusOverride:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    actor_is_admin = Boolean(default=False)


def _principal(command) -> Principal:
    return Principal(
        user_id=str(command.actor_id),
        role=command.actor_role,
        is_admin=bool(command.actor_is_admin),
    )


@ordering.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateItemStatus)
    def update_item_status(self, command):
        principal = _principal(command)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        sub_order = order.get_sub_order(command.sub_order_id)
        ensure_can_manage_sub_order(principal, sub_order)

        before = order.snapshot()
        order.update_item_status(
            sub_order_id=command.sub_order_id,
            item_id=command.item_id,
            item_status=command.item_status,
            updated_by=principal.user_id,
        )
        repo.add(order)

        logger.info(
            "Item status updated",
            order_id=str(order.id),
            sub_order_id=str(command.sub_order_id),
            item_id=str(command.item_id),
            item_status=command.item_status,
            order_status=order.status,
        )
        return MutationResult(order=order, before=before, after=order.snapshot(), order_id=str(order.id))

    @handle(UpdateSubOrderStatus)
    def update_sub_order_status(self, command):
        principal = _principal(command)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        sub_order = order.get_sub_order(command.sub_order_id)
        ensure_can_manage_sub_order(principal, sub_order)

        before = order.snapshot()
        order.update_sub_order_status(
            sub_order_id=command.sub_order_id,
            status=command.status,
            updated_by=principal.user_id,
            item_status=command.item_status,
        )
        repo.add(order)

        logger.info(
            "Sub-order status updated",
            order_id=str(order.id),
            sub_order_id=str(command.sub_order_id),
            status=command.status,
            item_status=command.item_status,
            order_status=order.status,
        )
        return MutationResult(order=order, before=before, after=order.snapshot(), order_id=str(order.id))

    @handle(OverrideOrderStatus)
    def override_order_status(self, command):
        principal = _principal(command)
        ensure_admin(principal)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        before = order.snapshot()
        order.override_status(command.status, updated_by=principal.user_id)
        repo.add(order)

        logger.info(
            "Order status overridden",
            order_id=str(order.id),
            status=order.status,
            derived_status=order.derived_status,
        )
        return MutationResult(order=order, before=before, after=order.snapshot(), order_id=str(order.id))

    @handle(ClearOrderStatusOverride)
    def clear_status_override(self, command):
        principal = _principal(command)
        ensure_admin(principal)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        before = order.snapshot()
        order.clear_status_override(updated_by=principal.user_id)
        repo.add(order)

        logger.info("Order status override cleared", order_id=str(order.id), status=order.status)
        return MutationResult(order=order, before=before, after=order.snapshot(), order_id=str(order.id))
