"""New sub-order template: pushed to the seller who has to fulfil it."""

from notifications.templates.formatting import sub_order_block
from notifications.types import NotificationChannel, NotificationType


class SubOrderPlacedTemplate:
    notification_type = NotificationType.SUB_ORDER_PLACED.value
    event_name = "suborder.created"
    default_channels = [NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"New order {context.get('orderId', 'N/A')}",
            "body": sub_order_block(context),
        }
