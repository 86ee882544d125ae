"""
Verify Login Code Use Case

Exchanges a valid login code for a session.
"""

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.session_issuer import SessionIssuer, sign_in_error
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.principal import DEFAULT_PROVIDER
from .dtos import LoginResponse


class VerifyLoginCodeUseCase:
    """
    Use case for passwordless sign-in, step two.

    Business Rules:
    - User must exist (NOT_FOUND)
    - Suspended and anonymized users cannot sign in (UNAUTHORIZED)
    - A wrong code counts as an attempt; after 5 attempts the code is dropped
    - A valid code is single-use and opens a credentials session
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, code: str) -> Result[LoginResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            disabled = sign_in_error(user)
            if disabled:
                return Return.err(disabled)

            tokens = TokenService(self.uow)

            validation = await tokens.validate_login_code(email, code)
            if not validation.valid:
                await tokens.increment_login_code_attempts(email)
                await self.uow.commit()
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired login code")
                )

            consumed = await tokens.consume_login_code(email)
            if consumed == 0:
                return Return.err(
                    Error("INVALID_OR_EXPIRED_TOKEN", "Invalid or expired login code")
                )

            session = await SessionIssuer(self.uow, tokens).login(
                user, provider=DEFAULT_PROVIDER
            )

            await self.uow.commit()

            return Return.ok(session)
