"""E-mail notifications for order events.

Delivery is simulated: the composed message is written to the log instead of
an SMTP relay, and returned to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Optional

from apparel_studio.core.config import get_settings

if TYPE_CHECKING:
    from apparel_studio.modules.orders.models import Order

logger = logging.getLogger(__name__)

NOTIFY_STATUS_UPDATE = "status_update"
NOTIFY_NEW_ORDER = "new_order"
NOTIFY_REVISION = "revision"

NotificationKind = Literal["status_update", "new_order", "revision"]

SUBJECT_PREFIX = "[ApparelCreative]"
FEEDBACK_INVITATION = (
    "Admin has uploaded creative results. Please log in to review and provide feedback."
)


@dataclass(frozen=True, slots=True)
class Notification:
    recipient: str
    subject: str
    body: str
    sender: str


@dataclass(slots=True)
class NotificationService:
    sender: str
    recipient_domain: str
    enabled: bool = True

    @classmethod
    def from_settings(cls) -> "NotificationService":
        settings = get_settings().notifications
        return cls(
            sender=settings.sender,
            recipient_domain=settings.recipient_domain,
            enabled=settings.enabled,
        )

    def compose(self, order: "Order", kind: NotificationKind) -> Notification:
        from apparel_studio.modules.orders.models import OrderStatus

        subject = f"{SUBJECT_PREFIX} Order Update: {order.title}"
        if kind == NOTIFY_STATUS_UPDATE:
            body = f"Your order status has changed to: {order.status.value}."
            if order.status is OrderStatus.AWAITING_FEEDBACK:
                body += f"\n\n{FEEDBACK_INVITATION}"
        elif kind == NOTIFY_NEW_ORDER:
            body = f"A new order has been created: {order.title}."
        elif kind == NOTIFY_REVISION:
            notes = order.revision_notes or "No specific notes."
            body = (
                f"The customer has requested revisions for order: {order.title}."
                f"\n\nNotes: {notes}"
            )
        else:
            raise ValueError(f"Unknown notification kind: {kind}")

        return Notification(
            recipient=f"{order.customer_id}@{self.recipient_domain}",
            subject=subject,
            body=body,
            sender=self.sender,
        )

    def notify(self, order: "Order", kind: NotificationKind) -> Optional[Notification]:
        if not self.enabled:
            return None
        message = self.compose(order, kind)
        logger.info(
            "[SMTP SIMULATION] To: %s Subject: %s Using Auth User: %s\n\n%s",
            message.recipient,
            message.subject,
            message.sender,
            message.body,
        )
        return message
