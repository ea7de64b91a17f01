"""Domain services for account management."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from apparel_studio.core.passwords import hash_password, verify_password

from .exceptions import AccountAlreadyExistsError, AccountError
from .models import ROLES, Account, AccountCreateInput
from .repository import AccountRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Registration, credential checks and lookups."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        from apparel_studio.infrastructure.database.repositories import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        return await self._repository.get_by_email(normalize_email(email))

    async def list_accounts(self, role: str | None = None) -> Sequence[Account]:
        return await self._repository.list_accounts(role)

    async def authenticate(self, email: str, password: str) -> Account | None:
        account = await self._repository.get_by_email(normalize_email(email))
        if account is None or not account.is_active:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        if payload.role not in ROLES:
            raise AccountError(f"Unknown role: {payload.role}")

        email = normalize_email(payload.email)
        existing = await self._repository.get_by_email(email)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Email already registered: {email}")

        return await self._repository.create_account(
            email=email,
            name=payload.name.strip(),
            password_hash=hash_password(payload.password),
            role=payload.role,
            is_active=payload.is_active,
        )

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))
