import pytest
from httpx import AsyncClient
from sqlmodel import select

from servicedesk_auth.api.utils.jwt import verify_jwt
from servicedesk_auth.domain.entities import Account, User

GOOGLE_PROFILE = {
    "provider_account_id": "google-uid-1",
    "email": "o@acme.com",
    "firstname": "Oli",
    "lastname": "Oak",
    "access_token": "ya29.provider",
}


@pytest.mark.asyncio
async def test_oauth_sign_up(client: AsyncClient, db_session):
    response = await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)

    assert response.status_code == 200
    claims = verify_jwt(response.json()["access_token"])
    assert claims["provider"] == "google"
    assert claims["emailVerified"] is True
    assert claims["profileComplete"] is False
    assert claims["role"] == "client"

    user = (await db_session.exec(select(User).where(User.email == "o@acme.com"))).one()
    assert user.password_hash is None


@pytest.mark.asyncio
async def test_oauth_sign_in_again_reuses_link(client: AsyncClient, db_session):
    first = await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)
    second = await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)

    assert second.status_code == 200
    assert first.json()["user"]["id"] == second.json()["user"]["id"]
    accounts = (await db_session.exec(select(Account))).all()
    assert len(accounts) == 1


@pytest.mark.asyncio
async def test_oauth_links_existing_password_user(client: AsyncClient, db_session):
    register = await client.post(
        "/auth/register", json={"email": "o@acme.com", "password": "SecurePass123!"}
    )

    response = await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)

    assert response.status_code == 200
    assert response.json()["user"]["id"] == register.json()["id"]
    account = (await db_session.exec(select(Account))).one()
    assert account.provider == "google"
    assert account.provider_access_token == "ya29.provider"


@pytest.mark.asyncio
async def test_refresh_keeps_oauth_provider(client: AsyncClient):
    session = (await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)).json()

    response = await client.post(
        "/auth/refresh", json={"refresh_token": session["refresh_token"]}
    )

    assert verify_jwt(response.json()["access_token"])["provider"] == "google"


@pytest.mark.asyncio
async def test_link_account(client: AsyncClient, db_session):
    await client.post(
        "/auth/register", json={"email": "me@acme.com", "password": "SecurePass123!"}
    )
    login = await client.post(
        "/auth/login", json={"email": "me@acme.com", "password": "SecurePass123!"}
    )
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    response = await client.post(
        "/auth/oauth/github/link",
        json={"provider_account_id": "gh-42", "email": "me@acme.com"},
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["provider"] == "github"
    assert response.json()["user_id"] == login.json()["user"]["id"]


@pytest.mark.asyncio
async def test_link_account_owned_by_another_user(client: AsyncClient, db_session):
    """Linking user A's provider identity to user B is refused and changes nothing"""
    await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)
    await client.post(
        "/auth/register", json={"email": "b@acme.com", "password": "SecurePass123!"}
    )
    login = await client.post(
        "/auth/login", json={"email": "b@acme.com", "password": "SecurePass123!"}
    )
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    before = [
        (a.user_id, a.provider, a.provider_account_id)
        for a in (await db_session.exec(select(Account))).all()
    ]

    response = await client.post(
        "/auth/oauth/google/link", json=GOOGLE_PROFILE, headers=headers
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    after = [
        (a.user_id, a.provider, a.provider_account_id)
        for a in (await db_session.exec(select(Account))).all()
    ]
    assert after == before


@pytest.mark.asyncio
async def test_link_same_provider_twice(client: AsyncClient):
    session = (await client.post("/auth/oauth/google/callback", json=GOOGLE_PROFILE)).json()
    headers = {"Authorization": f"Bearer {session['access_token']}"}

    response = await client.post(
        "/auth/oauth/google/link",
        json={"provider_account_id": "google-uid-2", "email": "o@acme.com"},
        headers=headers,
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_oauth_second_identity_of_same_provider_conflicts(
    client: AsyncClient, db_session
):
    """A user already linked to one github identity cannot gain another through sign-in"""
    first = await client.post(
        "/auth/oauth/github/callback",
        json={"provider_account_id": "gh-1", "email": "a@acme.com"},
    )
    assert first.status_code == 200

    response = await client.post(
        "/auth/oauth/github/callback",
        json={"provider_account_id": "gh-2", "email": "a@acme.com"},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"
    accounts = (await db_session.exec(select(Account))).all()
    assert [a.provider_account_id for a in accounts] == ["gh-1"]
