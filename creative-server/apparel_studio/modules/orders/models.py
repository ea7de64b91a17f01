"""Domain representations for orders and their attachments."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    AWAITING_FEEDBACK = "Awaiting Customer Feedback"
    COMPLETED = "Completed"
    REVISIONS_REQUESTED = "Revisions Requested"


ATTACHMENT_IMAGE = "image"
ATTACHMENT_DOCUMENT = "document"
ATTACHMENT_RESULT = "result"
BRIEF_ATTACHMENT_TYPES = frozenset({ATTACHMENT_IMAGE, ATTACHMENT_DOCUMENT})


@dataclass(slots=True)
class Attachment:
    id: str
    order_id: str
    name: str
    url: str
    type: str
    created_at: Optional[datetime] = None

    def is_result(self) -> bool:
        return self.type == ATTACHMENT_RESULT


@dataclass(slots=True)
class Order:
    id: str
    customer_id: str
    brand_id: str
    title: str
    status: OrderStatus = OrderStatus.PENDING
    description: str = ""
    creative_expectations: str = ""
    colors: str = ""
    sizes: str = ""
    features: str = ""
    target_audience: str = ""
    usage: str = ""
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    revision_notes: Optional[str] = None
    attachments: list[Attachment] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def result_files(self) -> list[Attachment]:
        return [attachment for attachment in self.attachments if attachment.is_result()]


@dataclass(slots=True)
class AttachmentInput:
    url: str
    name: str = ""
    type: str = ATTACHMENT_DOCUMENT


@dataclass(slots=True)
class OrderCreateInput:
    customer_id: str
    brand_id: str
    title: str
    description: str = ""
    creative_expectations: str = ""
    colors: str = ""
    sizes: str = ""
    features: str = ""
    target_audience: str = ""
    usage: str = ""
    notes: Optional[str] = None
    attachments: list[AttachmentInput] = field(default_factory=list)


@dataclass(slots=True)
class OrderAdminUpdate:
    status: Optional[OrderStatus] = None
    admin_notes: Optional[str] = None
    results: list[AttachmentInput] = field(default_factory=list)
