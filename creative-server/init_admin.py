"""
Seed the default administrator account.

Run once after the database exists; credentials may be overridden with
ADMIN_EMAIL / ADMIN_PASSWORD.
"""
import asyncio
import os

from apparel_studio.infrastructure.database import get_session, init_db
from apparel_studio.modules.accounts import ROLE_ADMIN, AccountCreateInput, AccountService

DEFAULT_EMAIL = "admin@apparelcreative.studio"
DEFAULT_PASSWORD = "admin123"


async def create_default_admin() -> None:
    await init_db()
    email = os.environ.get("ADMIN_EMAIL", DEFAULT_EMAIL)
    password = os.environ.get("ADMIN_PASSWORD", DEFAULT_PASSWORD)

    async for db in get_session():
        service = AccountService.with_session(db)
        admins = await service.list_accounts(role=ROLE_ADMIN)
        if admins:
            print("Administrator already exists, nothing to do")
            return

        await service.create_account(
            AccountCreateInput(
                email=email,
                password=password,
                name="Studio Admin",
                role=ROLE_ADMIN,
                is_active=True,
            )
        )
        await db.commit()

        print("=" * 50)
        print("Default administrator created")
        print("=" * 50)
        print(f"Email:    {email}")
        print(f"Password: {password}")
        print("=" * 50)
        print("Change the password after the first login!")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin())
