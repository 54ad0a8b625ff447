"""Order deletion: admin-only hard delete of the whole aggregate."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.access import Principal, ensure_admin
from ordering.order.order import Order
from ordering.order.results import MutationResult

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class DeleteOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    actor_is_admin = Boolean(default=False)


@ordering.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrder)
    def delete_order(self, command):
        ensure_admin(
            Principal(
                user_id=str(command.actor_id),
                role=command.actor_role,
                is_admin=bool(command.actor_is_admin),
            )
        )
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        before = order.snapshot()
        repo.remove_order(order)

        logger.info("Order deleted", order_id=str(command.order_id), deleted_by=str(command.actor_id))
        return MutationResult(order=None, before=before, after=None, order_id=str(command.order_id))
