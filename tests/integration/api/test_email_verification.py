import pytest
from httpx import AsyncClient

from servicedesk_auth.api.utils.jwt import verify_jwt

PASSWORD = "SecurePass123!"


async def register_and_login(client: AsyncClient, email: str = "v@acme.com") -> dict:
    await client.post("/auth/register", json={"email": email, "password": PASSWORD})
    response = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    return response.json()


async def verify_email(client: AsyncClient, notifications, email: str = "v@acme.com"):
    sent = await client.post("/auth/send-verification", json={"email": email})
    assert sent.status_code == 200
    token = notifications.last("email_verification", email)[0]
    return await client.post("/auth/verify-email", json={"token": token})


@pytest.mark.asyncio
async def test_verify_email(client: AsyncClient, notifications):
    session = await register_and_login(client)

    response = await verify_email(client, notifications)

    assert response.status_code == 200
    refreshed = await client.post(
        "/auth/refresh", json={"refresh_token": session["refresh_token"]}
    )
    claims = verify_jwt(refreshed.json()["access_token"])
    assert claims["emailVerified"] is True
    # Profile still incomplete, so no promotion yet
    assert claims["status"] == "pending"


@pytest.mark.asyncio
async def test_verification_token_is_single_use(client: AsyncClient, notifications):
    await register_and_login(client)
    await client.post("/auth/send-verification", json={"email": "v@acme.com"})
    token = notifications.last("email_verification", "v@acme.com")[0]

    assert (await client.post("/auth/verify-email", json={"token": token})).status_code == 200
    again = await client.post("/auth/verify-email", json={"token": token})

    assert again.status_code == 400


@pytest.mark.asyncio
async def test_send_verification_when_already_verified(client: AsyncClient, notifications):
    await register_and_login(client)
    await verify_email(client, notifications)

    response = await client.post("/auth/send-verification", json={"email": "v@acme.com"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_send_verification_delivery_failure(client: AsyncClient, notifications):
    await register_and_login(client)
    notifications.fail = True

    response = await client.post("/auth/send-verification", json={"email": "v@acme.com"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_verified_email_and_complete_profile_promote_account(
    client: AsyncClient, notifications
):
    """pending -> verified once both conditions hold, in either order"""
    session = await register_and_login(client)
    headers = {"Authorization": f"Bearer {session['access_token']}"}

    profile = await client.post(
        "/auth/complete-profile",
        json={"firstname": "Val", "lastname": "Vu", "company": "Acme", "phone": "555-0100"},
        headers=headers,
    )
    assert profile.status_code == 200
    assert profile.json()["user"]["profile_complete"] is True
    assert profile.json()["user"]["status"] == "pending"

    assert (await verify_email(client, notifications)).status_code == 200

    refreshed = await client.post(
        "/auth/refresh", json={"refresh_token": session["refresh_token"]}
    )
    claims = verify_jwt(refreshed.json()["access_token"])
    assert claims["status"] == "verified"
    assert claims["profileComplete"] is True
    assert claims["firstname"] == "Val"


@pytest.mark.asyncio
async def test_complete_profile_requires_token(client: AsyncClient):
    response = await client.post("/auth/complete-profile", json={"firstname": "X"})

    assert response.status_code in (401, 403)
