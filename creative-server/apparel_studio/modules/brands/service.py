"""Domain service for customer brand profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.modules.accounts import Account

from .exceptions import BrandError, BrandNotFoundError, BrandOwnershipError
from .models import Brand, BrandCreateInput, BrandUpdateInput
from .repository import BrandRepository


def _clean_urls(urls: Sequence[str]) -> list[str]:
    return [url.strip() for url in urls if url and url.strip()]


@dataclass(slots=True)
class BrandService:
    repository: BrandRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "BrandService":
        from apparel_studio.infrastructure.database.repositories import SqlBrandRepository

        return cls(SqlBrandRepository(session))

    async def create_brand(self, payload: BrandCreateInput) -> Brand:
        if not payload.name.strip():
            raise BrandError("Brand name must not be empty")
        payload.name = payload.name.strip()
        payload.reference_assets = _clean_urls(payload.reference_assets)
        return await self.repository.create(payload)

    async def get_visible_brand(self, brand_id: str, account: Account) -> Brand:
        """Return the brand if ``account`` may see it (admins see every brand)."""
        brand = await self.repository.get_by_id(brand_id)
        if brand is None:
            raise BrandNotFoundError(brand_id)
        if not account.is_admin() and brand.customer_id != account.id:
            raise BrandOwnershipError(brand_id)
        return brand

    async def list_brands(self, customer_id: str | None = None) -> Sequence[Brand]:
        return await self.repository.list_brands(customer_id)

    async def update_brand(self, brand_id: str, account: Account, payload: BrandUpdateInput) -> Brand:
        await self.get_visible_brand(brand_id, account)

        changes = payload.changes()
        if "name" in changes:
            name = str(changes["name"] or "").strip()
            if not name:
                raise BrandError("Brand name must not be empty")
            changes["name"] = name
        if "description" in changes:
            changes["description"] = changes["description"] or ""
        if "reference_assets" in changes:
            changes["reference_assets"] = _clean_urls(changes["reference_assets"] or [])  # type: ignore[arg-type]
        if changes.get("is_primary") is None:
            changes.pop("is_primary", None)
        if not changes:
            return await self.get_visible_brand(brand_id, account)
        return await self.repository.update(brand_id, changes)
