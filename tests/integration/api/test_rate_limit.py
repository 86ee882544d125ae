import pytest
from httpx import AsyncClient

CREDENTIALS = {"email": "guess@acme.com", "password": "WrongPass123!"}


@pytest.mark.asyncio
async def test_login_throttled_after_ten_attempts(client: AsyncClient, rate_limiting):
    for _ in range(10):
        response = await client.post("/auth/login", json=CREDENTIALS)
        assert response.status_code == 401

    response = await client.post("/auth/login", json=CREDENTIALS)

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "TOO_MANY_REQUESTS"
    assert "Retry-After" in response.headers


@pytest.mark.asyncio
async def test_login_code_mail_throttled(client: AsyncClient, rate_limiting):
    for _ in range(5):
        response = await client.post("/auth/send-login-code", json={"email": "x@acme.com"})
        assert response.status_code == 404

    response = await client.post("/auth/send-login-code", json={"email": "x@acme.com"})

    assert response.status_code == 429


@pytest.mark.asyncio
async def test_limits_are_counted_per_route(client: AsyncClient, rate_limiting):
    for _ in range(11):
        await client.post("/auth/login", json=CREDENTIALS)

    response = await client.post("/auth/forgot-password", json={"email": "x@acme.com"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_throttling_disabled(client: AsyncClient):
    for _ in range(12):
        response = await client.post("/auth/login", json=CREDENTIALS)

    assert response.status_code == 401
