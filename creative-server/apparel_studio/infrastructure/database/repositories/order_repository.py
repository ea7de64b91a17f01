"""SQLAlchemy implementation of the order repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from apparel_studio.infrastructure.database.models import (
    Attachment as AttachmentModel,
    Order as OrderModel,
)
from apparel_studio.modules.orders.exceptions import OrderNotFoundError
from apparel_studio.modules.orders.models import (
    Attachment,
    AttachmentInput,
    Order,
    OrderCreateInput,
    OrderStatus,
)
from apparel_studio.modules.orders.repository import OrderRepository


class SqlOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, order_id: str) -> Order | None:
        model = await self._get_model(order_id)
        return self._to_domain(model) if model else None

    async def list_orders(
        self,
        *,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> Sequence[Order]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.attachments))
            .order_by(OrderModel.created_at.desc())
        )
        if customer_id is not None:
            stmt = stmt.where(OrderModel.customer_id == customer_id)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status.value)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create(self, payload: OrderCreateInput) -> Order:
        model = OrderModel(
            customer_id=payload.customer_id,
            brand_id=payload.brand_id,
            title=payload.title,
            description=payload.description,
            creative_expectations=payload.creative_expectations,
            status=OrderStatus.PENDING.value,
            colors=payload.colors,
            sizes=payload.sizes,
            features=payload.features,
            target_audience=payload.target_audience,
            usage=payload.usage,
            notes=payload.notes,
        )
        self._session.add(model)
        await self._session.flush()
        self._add_attachment_models(model.id, payload.attachments, start=0)
        await self._session.flush()
        return await self._reload(model.id)

    async def update(self, order_id: str, changes: dict[str, Any]) -> Order:
        model = await self._get_model(order_id)
        if model is None:
            raise OrderNotFoundError(order_id)

        for key, value in changes.items():
            if isinstance(value, OrderStatus):
                value = value.value
            setattr(model, key, value)
        model.updated_at = func.now()

        await self._session.flush()
        return await self._reload(order_id)

    async def add_attachments(self, order_id: str, attachments: Sequence[AttachmentInput]) -> Order:
        model = await self._get_model(order_id)
        if model is None:
            raise OrderNotFoundError(order_id)

        self._add_attachment_models(order_id, attachments, start=len(model.attachments))
        model.updated_at = func.now()
        await self._session.flush()
        return await self._reload(order_id)

    def _add_attachment_models(
        self,
        order_id: str,
        attachments: Sequence[AttachmentInput],
        *,
        start: int,
    ) -> None:
        for offset, attachment in enumerate(attachments):
            self._session.add(
                AttachmentModel(
                    order_id=order_id,
                    name=attachment.name,
                    url=attachment.url,
                    type=attachment.type,
                    position=start + offset,
                )
            )

    async def _get_model(self, order_id: str) -> OrderModel | None:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.attachments))
            .where(OrderModel.id == order_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, order_id: str) -> Order:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.attachments))
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one())

    @staticmethod
    def _to_domain(model: OrderModel) -> Order:
        return Order(
            id=str(model.id),
            customer_id=model.customer_id,
            brand_id=model.brand_id,
            title=model.title,
            status=OrderStatus(model.status),
            description=model.description or "",
            creative_expectations=model.creative_expectations or "",
            colors=model.colors or "",
            sizes=model.sizes or "",
            features=model.features or "",
            target_audience=model.target_audience or "",
            usage=model.usage or "",
            notes=model.notes,
            admin_notes=model.admin_notes,
            revision_notes=model.revision_notes,
            attachments=[
                Attachment(
                    id=str(attachment.id),
                    order_id=attachment.order_id,
                    name=attachment.name or "",
                    url=attachment.url,
                    type=attachment.type,
                    created_at=attachment.created_at,
                )
                for attachment in model.attachments
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
