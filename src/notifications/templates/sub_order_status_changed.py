"""Sub-order status template: pushed to the owning seller."""

from notifications.types import NotificationChannel, NotificationType


class SubOrderStatusChangedTemplate:
    notification_type = NotificationType.SUB_ORDER_STATUS_CHANGED.value
    event_name = "suborder.statusChanged"
    default_channels = [NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"Sub-order {context.get('id', 'N/A')} is {context.get('status', 'unknown')}",
            "body": f"Order #{context.get('orderId', 'N/A')}: sub-order status changed to {context.get('status')}.",
        }
