"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from apparel_studio.modules.accounts import AccountAlreadyExistsError, AccountError
from apparel_studio.modules.brands import BrandError, BrandNotFoundError, BrandOwnershipError
from apparel_studio.modules.bundles import BundleError
from apparel_studio.modules.orders import (
    OrderError,
    OrderNotFoundError,
    OrderOwnershipError,
    OrderTransitionError,
)

_STATUS_BY_ERROR: tuple[tuple[type[Exception], int, str | None], ...] = (
    (AccountAlreadyExistsError, status.HTTP_400_BAD_REQUEST, "Email already registered"),
    (BrandNotFoundError, status.HTTP_404_NOT_FOUND, "Brand not found"),
    (BrandOwnershipError, status.HTTP_403_FORBIDDEN, "Brand belongs to another customer"),
    (OrderNotFoundError, status.HTTP_404_NOT_FOUND, "Order not found"),
    (OrderOwnershipError, status.HTTP_403_FORBIDDEN, "Order belongs to another customer"),
    (OrderTransitionError, status.HTTP_409_CONFLICT, None),
    (BundleError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Bundling failed"),
    (AccountError, status.HTTP_400_BAD_REQUEST, None),
    (BrandError, status.HTTP_400_BAD_REQUEST, None),
    (OrderError, status.HTTP_400_BAD_REQUEST, None),
)


def to_http_error(exc: Exception) -> HTTPException:
    for error_type, status_code, detail in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=detail or str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error")


DOMAIN_ERRORS = (AccountError, BrandError, OrderError, BundleError)
