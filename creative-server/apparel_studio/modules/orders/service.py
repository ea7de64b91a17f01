"""Domain service orchestrating the order workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.modules.accounts import Account
from apparel_studio.modules.brands import Brand, BrandNotFoundError, BrandOwnershipError
from apparel_studio.modules.brands.repository import BrandRepository
from apparel_studio.modules.notifications import (
    NOTIFY_NEW_ORDER,
    NOTIFY_REVISION,
    NOTIFY_STATUS_UPDATE,
    NotificationService,
)

from .exceptions import OrderError, OrderNotFoundError, OrderOwnershipError, OrderTransitionError
from .models import (
    ATTACHMENT_RESULT,
    BRIEF_ATTACHMENT_TYPES,
    AttachmentInput,
    Order,
    OrderAdminUpdate,
    OrderCreateInput,
    OrderStatus,
)
from .repository import OrderRepository

# Statuses from which the customer may accept the work or ask for changes.
CUSTOMER_REVIEWABLE = frozenset({OrderStatus.AWAITING_FEEDBACK})


def _validate_attachments(
    attachments: Sequence[AttachmentInput],
    allowed_types: frozenset[str],
) -> list[AttachmentInput]:
    cleaned: list[AttachmentInput] = []
    for attachment in attachments:
        url = attachment.url.strip()
        if not url:
            raise OrderError("Attachment URL must not be empty")
        if attachment.type not in allowed_types:
            raise OrderError(f"Attachment type not allowed here: {attachment.type}")
        cleaned.append(AttachmentInput(url=url, name=attachment.name.strip(), type=attachment.type))
    return cleaned


@dataclass(slots=True)
class OrderService:
    repository: OrderRepository
    brands: BrandRepository
    notifier: NotificationService

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        notifier: Optional[NotificationService] = None,
    ) -> "OrderService":
        from apparel_studio.infrastructure.database.repositories import (
            SqlBrandRepository,
            SqlOrderRepository,
        )

        return cls(
            SqlOrderRepository(session),
            SqlBrandRepository(session),
            notifier or NotificationService.from_settings(),
        )

    async def create_order(self, payload: OrderCreateInput) -> Order:
        if not payload.title.strip():
            raise OrderError("Order title must not be empty")
        brand = await self.brands.get_by_id(payload.brand_id)
        if brand is None:
            raise BrandNotFoundError(payload.brand_id)
        if brand.customer_id != payload.customer_id:
            raise BrandOwnershipError(payload.brand_id)

        payload.title = payload.title.strip()
        payload.attachments = _validate_attachments(payload.attachments, BRIEF_ATTACHMENT_TYPES)
        order = await self.repository.create(payload)
        self.notifier.notify(order, NOTIFY_NEW_ORDER)
        return order

    async def get_visible_order(self, order_id: str, account: Account) -> Order:
        order = await self.repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if not account.is_admin() and order.customer_id != account.id:
            raise OrderOwnershipError(order_id)
        return order

    async def list_for(self, account: Account, status: OrderStatus | None = None) -> Sequence[Order]:
        customer_id = None if account.is_admin() else account.id
        return await self.repository.list_orders(customer_id=customer_id, status=status)

    async def admin_update(self, order_id: str, update: OrderAdminUpdate) -> Order:
        order = await self.repository.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        changes: dict[str, Any] = {}
        if update.status is not None:
            changes["status"] = update.status
        if update.admin_notes is not None:
            changes["admin_notes"] = update.admin_notes
        results = _validate_attachments(update.results, frozenset({ATTACHMENT_RESULT}))

        if changes:
            order = await self.repository.update(order_id, changes)
        if results:
            order = await self.repository.add_attachments(order_id, results)

        kind = NOTIFY_REVISION if order.status is OrderStatus.REVISIONS_REQUESTED else NOTIFY_STATUS_UPDATE
        self.notifier.notify(order, kind)
        return order

    async def add_brief_attachments(
        self,
        order_id: str,
        account: Account,
        attachments: Sequence[AttachmentInput],
    ) -> Order:
        await self.get_visible_order(order_id, account)
        cleaned = _validate_attachments(attachments, BRIEF_ATTACHMENT_TYPES)
        if not cleaned:
            raise OrderError("No attachments supplied")
        return await self.repository.add_attachments(order_id, cleaned)

    async def request_revision(self, order_id: str, account: Account, notes: str) -> Order:
        order = await self._get_reviewable(order_id, account)
        notes = notes.strip()
        if not notes:
            raise OrderError("Revision notes must not be empty")
        order = await self.repository.update(
            order.id,
            {"status": OrderStatus.REVISIONS_REQUESTED, "revision_notes": notes},
        )
        self.notifier.notify(order, NOTIFY_REVISION)
        return order

    async def mark_completed(self, order_id: str, account: Account) -> Order:
        order = await self._get_reviewable(order_id, account)
        order = await self.repository.update(order.id, {"status": OrderStatus.COMPLETED})
        self.notifier.notify(order, NOTIFY_STATUS_UPDATE)
        return order

    async def load_bundle_context(self, order_id: str, account: Account) -> tuple[Order, Brand | None]:
        """Snapshot the order and its brand for archive bundling.

        A dangling brand reference yields ``None`` rather than an error.
        """
        order = await self.get_visible_order(order_id, account)
        brand = await self.brands.get_by_id(order.brand_id)
        return order, brand

    async def _get_reviewable(self, order_id: str, account: Account) -> Order:
        order = await self.get_visible_order(order_id, account)
        if order.customer_id != account.id:
            raise OrderOwnershipError(order_id)
        if order.status not in CUSTOMER_REVIEWABLE:
            raise OrderTransitionError(
                f"Order is '{order.status.value}', expected '{OrderStatus.AWAITING_FEEDBACK.value}'"
            )
        return order
