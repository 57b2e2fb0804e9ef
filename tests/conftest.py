"""
Test configuration and shared fixtures.
Every test gets a freshly seeded in-memory database with no simulated latency.
"""
from __future__ import annotations

import os

os.environ["SIMULATED_LATENCY_SECONDS"] = "0"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from invoicedesk.db.session import InMemoryDatabase, get_db  # noqa: E402
from invoicedesk.main import app  # noqa: E402

ADMIN_EMAIL = "admin@company.com"
USER_EMAIL = "user@company.com"
PASSWORD = "password"


@pytest.fixture
def db() -> InMemoryDatabase:
    """Provide a seeded database private to one test."""
    return InMemoryDatabase(seed=True)


@pytest.fixture
def empty_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest_asyncio.fixture
async def client(db: InMemoryDatabase) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP test client with the test database injected."""
    app.dependency_overrides[get_db] = lambda: db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Helper fixtures ───────────────────────────────────────────────────────────

async def _login(client: AsyncClient, email: str, password: str = PASSWORD) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization headers for the seeded standard user (id "2")."""
    return await _login(client, USER_EMAIL)


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization headers for the seeded admin (id "1")."""
    return await _login(client, ADMIN_EMAIL)


@pytest.fixture
def registration() -> dict[str, Any]:
    return {
        "email": "newuser@example.com",
        "password": "secret1",
        "username": "new_user",
        "full_name": "Jane Q Public",
        "address": "789 Elm Street",
        "mobile": "+1 (555) 222-3333",
    }


@pytest.fixture
def login_as(client: AsyncClient) -> Callable[..., Awaitable[dict[str, str]]]:
    """Log any account in through the API and return its Authorization headers."""

    async def _login_as(email: str, password: str = PASSWORD) -> dict[str, str]:
        return await _login(client, email, password)

    return _login_as
