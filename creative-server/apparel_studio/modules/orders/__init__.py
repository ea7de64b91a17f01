"""Order domain exports."""

from .exceptions import OrderError, OrderNotFoundError, OrderOwnershipError, OrderTransitionError
from .models import (
    ATTACHMENT_DOCUMENT,
    ATTACHMENT_IMAGE,
    ATTACHMENT_RESULT,
    BRIEF_ATTACHMENT_TYPES,
    Attachment,
    AttachmentInput,
    Order,
    OrderAdminUpdate,
    OrderCreateInput,
    OrderStatus,
)
from .service import OrderService

__all__ = [
    "ATTACHMENT_DOCUMENT",
    "ATTACHMENT_IMAGE",
    "ATTACHMENT_RESULT",
    "BRIEF_ATTACHMENT_TYPES",
    "Attachment",
    "AttachmentInput",
    "Order",
    "OrderAdminUpdate",
    "OrderCreateInput",
    "OrderStatus",
    "OrderError",
    "OrderNotFoundError",
    "OrderOwnershipError",
    "OrderTransitionError",
    "OrderService",
]
