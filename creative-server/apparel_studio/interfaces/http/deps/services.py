"""Service dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.modules.accounts import AccountService
from apparel_studio.modules.brands import BrandService
from apparel_studio.modules.bundles import AssetBundler
from apparel_studio.modules.orders import OrderService

from .database import get_db_session


def get_account_service(db: AsyncSession = Depends(get_db_session)) -> AccountService:
    return AccountService.with_session(db)


def get_brand_service(db: AsyncSession = Depends(get_db_session)) -> BrandService:
    return BrandService.with_session(db)


def get_order_service(db: AsyncSession = Depends(get_db_session)) -> OrderService:
    return OrderService.with_session(db)


def get_asset_bundler() -> AssetBundler:
    return AssetBundler.from_settings()


__all__ = [
    "get_account_service",
    "get_asset_bundler",
    "get_brand_service",
    "get_order_service",
]
