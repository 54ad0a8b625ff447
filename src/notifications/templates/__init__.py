"""Template registry: maps NotificationType to template classes.

Each template knows its default channels, the real-time event name it is
pushed under, and how to render content from an order snapshot.
"""

from notifications.templates.order_placed import OrderPlacedTemplate
from notifications.templates.order_status_changed import OrderStatusChangedTemplate
from notifications.templates.sub_order_placed import SubOrderPlacedTemplate
from notifications.templates.sub_order_status_changed import SubOrderStatusChangedTemplate
from notifications.types import NotificationType

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.ORDER_PLACED.value: OrderPlacedTemplate,
    NotificationType.ORDER_STATUS_CHANGED.value: OrderStatusChangedTemplate,
    NotificationType.SUB_ORDER_PLACED.value: SubOrderPlacedTemplate,
    NotificationType.SUB_ORDER_STATUS_CHANGED.value: SubOrderStatusChangedTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
