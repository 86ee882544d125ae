import pytest
from httpx import AsyncClient

from servicedesk_auth.api.utils.jwt import verify_jwt

PASSWORD = "SecurePass123!"


async def register(client: AsyncClient, email: str = "user@acme.com"):
    return await client.post(
        "/auth/register",
        json={"email": email, "password": PASSWORD, "firstname": "Uma", "lastname": "Ray"},
    )


@pytest.mark.asyncio
async def test_register(client: AsyncClient, notifications):
    """A new account is a pending client and receives a welcome email"""
    response = await register(client)

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "user@acme.com"
    assert data["role"] == "client"
    assert data["status"] == "pending"
    assert data["email_verified"] is False
    assert "password_hash" not in data
    assert notifications.last("welcome", "user@acme.com") == ("Uma Ray",)


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient):
    await register(client)

    response = await register(client)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_register_when_email_provider_is_down(client: AsyncClient, notifications):
    notifications.fail = True

    response = await register(client)

    assert response.status_code == 201
    assert response.json()["email"] == "user@acme.com"


@pytest.mark.asyncio
async def test_register_invalid_input(client: AsyncClient):
    response = await client.post(
        "/auth/register", json={"email": "not-an-email", "password": "short"}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login(client: AsyncClient):
    await register(client)

    response = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["email"] == "user@acme.com"
    claims = verify_jwt(data["access_token"])
    assert claims["email"] == "user@acme.com"
    assert claims["provider"] == "credentials"
    assert claims["isActive"] is True


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await register(client)

    response = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": "WrongPass999!"}
    )

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "UNAUTHORIZED"
    assert error["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_on_second_device_keeps_first_session(client: AsyncClient):
    await register(client)
    credentials = {"email": "user@acme.com", "password": PASSWORD}

    first = (await client.post("/auth/login", json=credentials)).json()
    second = (await client.post("/auth/login", json=credentials)).json()

    assert first["refresh_token"] != second["refresh_token"]
    for session in (first, second):
        response = await client.post(
            "/auth/refresh", json={"refresh_token": session["refresh_token"]}
        )
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_me(client: AsyncClient):
    await register(client)
    login = await client.post(
        "/auth/login", json={"email": "user@acme.com", "password": PASSWORD}
    )
    access_token = login.json()["access_token"]

    response = await client.get(
        "/auth/me", headers={"Authorization": f"Bearer {access_token}"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "user@acme.com"
    assert data["firstname"] == "Uma"
    assert data["profileComplete"] is False
    assert data["provider"] == "credentials"


@pytest.mark.asyncio
async def test_me_with_invalid_token(client: AsyncClient):
    response = await client.get(
        "/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
