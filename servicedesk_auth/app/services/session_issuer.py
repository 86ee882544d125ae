"""
Session Issuer

Turns an authenticated user into a session: access token + refresh token.
"""

from typing import Optional

from pydantic import BaseModel

from servicedesk_auth.libs.result import Error
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.entities import User, UserStatus
from servicedesk_auth.domain.principal import DEFAULT_PROVIDER, AuthenticatedPrincipal
from servicedesk_auth.api.utils.jwt import generate_jwt

DISABLED_STATUSES = (UserStatus.suspended, UserStatus.anonymized)


def sign_in_error(user: User) -> Optional[Error]:
    """Error for a user whose status forbids opening a session, None otherwise"""
    if user.status in DISABLED_STATUSES:
        return Error("UNAUTHORIZED", "User account is disabled")
    return None


class PublicUser(BaseModel):
    """User fields safe to return to the client"""

    id: str
    email: str
    firstname: str
    lastname: str
    role: str
    status: str
    profile_complete: bool
    email_verified: bool

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        principal = AuthenticatedPrincipal.from_user(user)
        return cls(
            id=str(user.id),
            email=user.email,
            firstname=principal.firstname,
            lastname=principal.lastname,
            role=principal.role,
            status=principal.status,
            profile_complete=principal.profile_complete,
            email_verified=principal.email_verified,
        )


class SessionTokens(BaseModel):
    """Access + refresh pair handed out by login, refresh and OAuth login"""

    access_token: str
    refresh_token: str
    user: PublicUser


class SessionIssuer:
    """
    Issues sessions inside the caller's transaction.

    Business Rules:
    - Every login creates a NEW refresh row, other sessions stay valid
    - The identity payload is always built from the current user state
    - Provider is inferred from the oldest linked OAuth account when not given
    """

    def __init__(self, uow: UnitOfWork, tokens: Optional[TokenService] = None):
        self.uow = uow
        self.tokens = tokens or TokenService(uow)

    async def resolve_provider(self, user: User) -> str:
        accounts = await self.uow.accounts.get_by_user_id(user.id)
        if accounts:
            return accounts[0].provider
        return DEFAULT_PROVIDER

    async def login(self, user: User, provider: Optional[str] = None) -> SessionTokens:
        """
        Open a session for an already authenticated user.

        Marks the session active, signs an access token for the principal and
        mints a refresh token. The caller commits.
        """
        await self.uow.users.update_session_status(user.id, True)
        user.is_active = True
        return await self.issue(user, provider)

    async def issue(self, user: User, provider: Optional[str] = None) -> SessionTokens:
        """Sign an access token from the current user state and mint a refresh token"""
        if provider is None:
            provider = await self.resolve_provider(user)

        principal = AuthenticatedPrincipal.from_user(user, provider=provider)
        access_token = generate_jwt(principal)
        refresh_token = await self.tokens.create_refresh_token(user.id)

        return SessionTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            user=PublicUser.from_user(user),
        )
