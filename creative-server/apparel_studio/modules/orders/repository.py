"""Repository protocol for orders and attachments."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import AttachmentInput, Order, OrderCreateInput, OrderStatus


class OrderRepository(Protocol):
    async def get_by_id(self, order_id: str) -> Order | None:
        ...

    async def list_orders(
        self,
        *,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> Sequence[Order]:
        ...

    async def create(self, payload: OrderCreateInput) -> Order:
        ...

    async def update(self, order_id: str, changes: dict[str, Any]) -> Order:
        ...

    async def add_attachments(self, order_id: str, attachments: Sequence[AttachmentInput]) -> Order:
        ...
