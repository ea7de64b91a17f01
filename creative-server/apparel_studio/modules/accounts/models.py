"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"
ROLES = frozenset({ROLE_ADMIN, ROLE_CUSTOMER})


@dataclass(slots=True)
class Account:
    id: str
    email: str
    name: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def is_customer(self) -> bool:
        return self.role == ROLE_CUSTOMER


@dataclass(slots=True)
class AccountCreateInput:
    email: str
    password: str
    name: str
    role: str = ROLE_CUSTOMER
    is_active: bool = True
