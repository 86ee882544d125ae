import pytest
from httpx import AsyncClient

PASSWORD = "SecurePass123!"
NEW_PASSWORD = "EvenBetterPass456!"


async def register(client: AsyncClient, email: str = "a@acme.com"):
    response = await client.post("/auth/register", json={"email": email, "password": PASSWORD})
    assert response.status_code == 201


async def request_reset(client: AsyncClient, notifications, email: str = "a@acme.com") -> str:
    response = await client.post("/auth/forgot-password", json={"email": email})
    assert response.status_code == 200
    return notifications.last("password_reset", email)[0]


@pytest.mark.asyncio
async def test_full_password_reset_flow(client: AsyncClient, notifications):
    await register(client)
    token = await request_reset(client, notifications)

    response = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": NEW_PASSWORD}
    )

    assert response.status_code == 200
    assert notifications.last("notification", "a@acme.com") == ("Password changed",)

    old_login = await client.post(
        "/auth/login", json={"email": "a@acme.com", "password": PASSWORD}
    )
    assert old_login.status_code == 401
    new_login = await client.post(
        "/auth/login", json={"email": "a@acme.com", "password": NEW_PASSWORD}
    )
    assert new_login.status_code == 200


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client: AsyncClient, notifications):
    await register(client)
    token = await request_reset(client, notifications)
    payload = {"token": token, "new_password": NEW_PASSWORD}

    assert (await client.post("/auth/reset-password", json=payload)).status_code == 200
    second = await client.post("/auth/reset-password", json=payload)

    assert second.status_code == 400
    assert second.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_second_request_supersedes_first_token(client: AsyncClient, notifications):
    await register(client)
    first = await request_reset(client, notifications)
    second = await request_reset(client, notifications)

    stale = await client.post(
        "/auth/reset-password", json={"token": first, "new_password": NEW_PASSWORD}
    )
    fresh = await client.post(
        "/auth/reset-password", json={"token": second, "new_password": NEW_PASSWORD}
    )

    assert stale.status_code == 400
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_forgot_password_unknown_email(client: AsyncClient):
    response = await client.post("/auth/forgot-password", json={"email": "ghost@acme.com"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_forgot_password_delivery_failure(client: AsyncClient, notifications):
    await register(client)
    notifications.fail = True

    response = await client.post("/auth/forgot-password", json={"email": "a@acme.com"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_reset_with_weak_password(client: AsyncClient, notifications):
    await register(client)
    token = await request_reset(client, notifications)

    response = await client.post(
        "/auth/reset-password", json={"token": token, "new_password": "short"}
    )

    assert response.status_code == 400
