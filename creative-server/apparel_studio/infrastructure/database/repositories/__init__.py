"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .brand_repository import SqlBrandRepository
from .order_repository import SqlOrderRepository

__all__ = [
    "SqlAccountRepository",
    "SqlBrandRepository",
    "SqlOrderRepository",
]
