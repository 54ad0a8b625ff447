"""Notification channel and type enums."""

from enum import Enum


class NotificationChannel(Enum):
    EMAIL = "Email"
    PUSH = "Push"


class NotificationType(Enum):
    ORDER_PLACED = "OrderPlaced"
    ORDER_STATUS_CHANGED = "OrderStatusChanged"
    SUB_ORDER_PLACED = "SubOrderPlaced"
    SUB_ORDER_STATUS_CHANGED = "SubOrderStatusChanged"
