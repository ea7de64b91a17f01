"""Order notification exports."""

from .service import (
    NOTIFY_NEW_ORDER,
    NOTIFY_REVISION,
    NOTIFY_STATUS_UPDATE,
    Notification,
    NotificationService,
)

__all__ = [
    "NOTIFY_NEW_ORDER",
    "NOTIFY_REVISION",
    "NOTIFY_STATUS_UPDATE",
    "Notification",
    "NotificationService",
]
