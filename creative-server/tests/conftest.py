import asyncio
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from apparel_studio.core.config import get_settings
from apparel_studio.infrastructure.database import dispose_engine, get_session, init_db
from apparel_studio.interfaces.http.deps import get_asset_bundler
from apparel_studio.modules.accounts import ROLE_ADMIN, AccountCreateInput, AccountService
from apparel_studio.modules.bundles import AssetBundler

ADMIN_EMAIL = "admin@studio.test"
ADMIN_PASSWORD = "admin-secret"
CUSTOMER_PASSWORD = "customer-secret"

CDN = "https://cdn.test"


def asset_transport(assets: dict[str, bytes]) -> httpx.MockTransport:
    """Serve ``assets`` by URL; anything else is a 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        content = assets.get(str(request.url))
        if content is None:
            return httpx.Response(404, text="missing")
        return httpx.Response(200, content=content)

    return httpx.MockTransport(handler)


@pytest.fixture()
def assets() -> dict[str, bytes]:
    return {
        f"{CDN}/finals/front.png": b"front-final",
        f"{CDN}/briefs/sketch.pdf": b"sketch",
        f"{CDN}/brand/logo.svg": b"<svg/>",
        f"{CDN}/brand/moodboard.jpg": b"mood",
    }


@pytest.fixture()
def configured_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'studio.db'}")
    monkeypatch.setenv("SECURITY__SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("BUNDLE__OUTPUT_DIR", str(tmp_path / "bundles"))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


async def _seed_admin() -> None:
    await init_db()
    async for db in get_session():
        await AccountService.with_session(db).create_account(
            AccountCreateInput(email=ADMIN_EMAIL, password=ADMIN_PASSWORD, name="Admin", role=ROLE_ADMIN)
        )
    await dispose_engine()


@pytest.fixture()
def client(configured_env, assets):
    asyncio.run(_seed_admin())

    from apparel_studio.main import create_app

    app = create_app()
    app.dependency_overrides[get_asset_bundler] = lambda: AssetBundler(transport=asset_transport(assets))
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(dispose_engine())


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return _bearer(response.json()["access_token"])


@pytest.fixture()
def register_customer(client) -> Callable[..., dict]:
    def register(email: str = "maker@brand.test", name: str = "Maker") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": CUSTOMER_PASSWORD, "name": name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"account": body["account"], "headers": _bearer(body["access_token"]), "token": body["access_token"]}

    return register


@pytest.fixture()
def customer(register_customer) -> dict:
    return register_customer()
