"""SQLAlchemy implementation of the brand repository."""

from __future__ import annotations

import json
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.infrastructure.database.models import Brand as BrandModel
from apparel_studio.modules.brands.exceptions import BrandNotFoundError
from apparel_studio.modules.brands.models import Brand, BrandCreateInput
from apparel_studio.modules.brands.repository import BrandRepository

JSON_LIST_FIELDS = ("color_palette", "reference_assets")


def _load_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [str(item) for item in value] if isinstance(value, list) else []


class SqlBrandRepository(BrandRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, brand_id: str) -> Brand | None:
        model = await self._get_model(brand_id)
        return self._to_domain(model) if model else None

    async def list_brands(self, customer_id: str | None = None) -> Sequence[Brand]:
        stmt = select(BrandModel).order_by(BrandModel.is_primary.desc(), BrandModel.created_at.desc())
        if customer_id is not None:
            stmt = stmt.where(BrandModel.customer_id == customer_id)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create(self, payload: BrandCreateInput) -> Brand:
        model = BrandModel(
            customer_id=payload.customer_id,
            name=payload.name,
            tagline=payload.tagline,
            description=payload.description,
            color_palette=json.dumps(payload.color_palette),
            is_primary=payload.is_primary,
            logo_url=payload.logo_url,
            reference_assets=json.dumps(payload.reference_assets),
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update(self, brand_id: str, changes: dict[str, Any]) -> Brand:
        model = await self._get_model(brand_id)
        if model is None:
            raise BrandNotFoundError(brand_id)

        for key, value in changes.items():
            if key in JSON_LIST_FIELDS:
                value = json.dumps(list(value or []))
            setattr(model, key, value)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def _get_model(self, brand_id: str) -> BrandModel | None:
        stmt = select(BrandModel).where(BrandModel.id == brand_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: BrandModel) -> Brand:
        return Brand(
            id=str(model.id),
            customer_id=model.customer_id,
            name=model.name,
            description=model.description or "",
            tagline=model.tagline,
            color_palette=_load_list(model.color_palette),
            is_primary=bool(model.is_primary),
            logo_url=model.logo_url,
            reference_assets=_load_list(model.reference_assets),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
