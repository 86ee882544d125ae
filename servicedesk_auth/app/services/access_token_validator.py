"""
Access Token Validator

Per-request verification of bearer access tokens.
"""

from pydantic import ValidationError

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.principal import AuthenticatedPrincipal
from servicedesk_auth.api.utils.jwt import verify_jwt


class AccessTokenValidator:
    """
    Validates an inbound access token and resolves its principal.

    Business Rules:
    - Signature and expiry are checked without touching storage
    - The referenced user must still exist (covers deleted accounts)
    - With enforce_session_revocation, the user must also hold at least one
      live refresh token, so revoke-all takes effect before the access token
      expires
    """

    def __init__(self, uow: UnitOfWork, enforce_session_revocation: bool = False):
        self.uow = uow
        self.enforce_session_revocation = enforce_session_revocation
        self.tokens = TokenService(uow)

    async def validate(self, token: str) -> Result[AuthenticatedPrincipal]:
        payload = verify_jwt(token)
        if payload is None:
            return Return.err(Error("UNAUTHORIZED", "Invalid or expired token"))

        try:
            principal = AuthenticatedPrincipal.model_validate(payload)
            user_id = principal.user_id
        except (ValidationError, ValueError):
            return Return.err(Error("UNAUTHORIZED", "Malformed token payload"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("UNAUTHORIZED", "User not found"))

            if self.enforce_session_revocation:
                has_session = await self.tokens.user_has_valid_refresh_tokens(user.id)
                if not has_session:
                    return Return.err(
                        Error("UNAUTHORIZED", "Session has been revoked")
                    )

        return Return.ok(principal)
