"""Order placed template: sent to the buyer when checkout succeeds."""

from notifications.templates.formatting import order_summary
from notifications.types import NotificationChannel, NotificationType


class OrderPlacedTemplate:
    notification_type = NotificationType.ORDER_PLACED.value
    event_name = "order.created"
    default_channels = [NotificationChannel.EMAIL.value, NotificationChannel.PUSH.value]

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("id", "N/A")
        name = (context.get("billing") or {}).get("name") or "there"
        return {
            "subject": f"Your order {order_id} has been placed",
            "body": (
                f"Hi {name},\n\n"
                f"Thank you for your order #{order_id}, placed at {context.get('createdAt')}.\n\n"
                f"{order_summary(context)}\n\n"
                "Each seller will prepare their part of your order and keep you posted."
            ),
        }
