"""Repository protocol for brands."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import Brand, BrandCreateInput


class BrandRepository(Protocol):
    async def get_by_id(self, brand_id: str) -> Brand | None:
        ...

    async def list_brands(self, customer_id: str | None = None) -> Sequence[Brand]:
        ...

    async def create(self, payload: BrandCreateInput) -> Brand:
        ...

    async def update(self, brand_id: str, changes: dict[str, Any]) -> Brand:
        ...
