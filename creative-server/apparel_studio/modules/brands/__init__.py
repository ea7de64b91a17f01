"""Brand domain exports."""

from .exceptions import BrandError, BrandNotFoundError, BrandOwnershipError
from .models import UNSET, Brand, BrandCreateInput, BrandUpdateInput
from .service import BrandService

__all__ = [
    "UNSET",
    "Brand",
    "BrandCreateInput",
    "BrandUpdateInput",
    "BrandError",
    "BrandNotFoundError",
    "BrandOwnershipError",
    "BrandService",
]
