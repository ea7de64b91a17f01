"""Account domain exports."""

from .exceptions import AccountAlreadyExistsError, AccountError
from .models import ROLE_ADMIN, ROLE_CUSTOMER, ROLES, Account, AccountCreateInput
from .service import AccountService

__all__ = [
    "ROLE_ADMIN",
    "ROLE_CUSTOMER",
    "ROLES",
    "Account",
    "AccountCreateInput",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountService",
]
