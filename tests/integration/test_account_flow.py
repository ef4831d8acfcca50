"""Integration tests for deposit/withdraw/ledger (requires running PG)."""

import pytest
from httpx import AsyncClient

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]


class TestAccountFlow:
    async def test_deposit_then_withdraw(self, client: AsyncClient, make_user) -> None:
        user = await make_user("acct")
        h = user["headers"]

        resp = await client.post("/api/v1/account/deposit", json={"amount_cents": 10000}, headers=h)
        assert resp.status_code == 200
        assert resp.json()["data"]["balance_cents"] == 10000

        resp = await client.post("/api/v1/account/withdraw", json={"amount_cents": 2500}, headers=h)
        assert resp.status_code == 200
        assert resp.json()["data"]["balance_cents"] == 7500

        resp = await client.get("/api/v1/account/ledger", headers=h)
        items = resp.json()["data"]["items"]
        assert [i["entry_type"] for i in items] == ["WITHDRAW", "DEPOSIT"]
        assert items[0]["amount_cents"] == -2500

    async def test_overdraw_is_rejected(self, client: AsyncClient, make_user) -> None:
        user = await make_user("acct")
        resp = await client.post(
            "/api/v1/account/withdraw", json={"amount_cents": 1}, headers=user["headers"]
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 2001

    async def test_requires_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/account/balance")
        assert resp.status_code == 401
