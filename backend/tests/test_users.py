"""Operator login tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.api
@pytest.mark.asyncio
class TestLogin:

    async def test_first_login_registers(self, client: AsyncClient):
        resp = await client.post(
            "/api/users/login", json={"name": "Asha", "phone": "+919876543210"}
        )

        assert resp.status_code == 201
        assert resp.json()["phone"] == "+919876543210"

    async def test_repeat_login_returns_same_user(self, client: AsyncClient):
        first = await client.post(
            "/api/users/login", json={"name": "Asha", "phone": "9876543210"}
        )
        second = await client.post(
            "/api/users/login", json={"name": "Someone Else", "phone": "9876543210"}
        )

        assert second.status_code == 200
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["name"] == "Asha"

    @pytest.mark.parametrize("phone", ["abc", "123", "+12-345-678"])
    async def test_invalid_phone_rejected(self, client: AsyncClient, phone):
        resp = await client.post("/api/users/login", json={"name": "X", "phone": phone})
        assert resp.status_code == 422
