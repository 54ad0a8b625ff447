"""Order status template: sent to the buyer whenever fulfilment moves on."""

from notifications.templates.formatting import order_summary
from notifications.types import NotificationChannel, NotificationType


class OrderStatusChangedTemplate:
    notification_type = NotificationType.ORDER_STATUS_CHANGED.value
    event_name = "order.statusChanged"
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("id", "N/A")
        status = context.get("status", "unknown")
        return {
            "subject": f'Order {order_id} status updated to "{status}"',
            "body": (
                f"Your order #{order_id} is now {status}.\n"
                f"Last updated at {context.get('updatedAt')}.\n\n"
                f"{order_summary(context)}"
            ),
        }
