"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session.
"""

import uuid
from collections.abc import Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(client: AsyncClient) -> Callable[[str], Awaitable[dict[str, str]]]:
    """Factory: register a fresh user, log in, return username/user_id/headers."""

    async def _make(prefix: str) -> dict:
        username = f"{prefix}_{uuid.uuid4().hex[:8]}"
        reg = await client.post("/api/v1/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "TestPass1",
            "name": prefix.title(),
            "surname": "Tester",
            "phone_number": "+1 555 0100",
        })
        assert reg.status_code == 201, reg.text
        login = await client.post("/api/v1/auth/login", json={
            "username": username,
            "password": "TestPass1",
        })
        data = login.json()["data"]
        return {
            "username": username,
            "user_id": data["user"]["user_id"],
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }

    return _make
