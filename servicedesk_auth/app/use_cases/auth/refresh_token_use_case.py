"""
Refresh Token Use Case

Handles access token refresh with refresh token rotation.
"""

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.session_issuer import SessionIssuer, sign_in_error
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import LoginResponse


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token rotation: the presented token is deleted, a new one issued
    - Each refresh token is usable exactly once; if two requests race with
      the same token only the one that deletes the row succeeds
    - The new access token reflects the CURRENT user state (role, status and
      profile may have changed since the old token was issued)
    - Provider claim is inferred from the user's linked OAuth accounts
    - Suspended and anonymized users get no new pair
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[LoginResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate

        Returns:
            Result with new access and refresh tokens, or Error

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: Token unknown, expired or already rotated
            - NOT_FOUND: Token owner no longer exists
            - UNAUTHORIZED: Token owner is suspended or anonymized
        """
        async with self.uow:
            tokens = TokenService(self.uow)

            validation = await tokens.validate_refresh_token(refresh_token)
            if not validation.valid:
                # Persist the removal of an expired row
                await self.uow.commit()
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired refresh token")
                )

            consumed = await tokens.consume_refresh_token(refresh_token)
            if consumed.is_err():
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired refresh token")
                )

            user = await self.uow.users.get_by_id(validation.user_id)
            if user is None:
                await self.uow.commit()
                return Return.err(Error("NOT_FOUND", "User not found"))

            disabled = sign_in_error(user)
            if disabled:
                # The presented token stays consumed
                await self.uow.commit()
                return Return.err(disabled)

            session = await SessionIssuer(self.uow, tokens).issue(user)

            await self.uow.commit()

            return Return.ok(session)
