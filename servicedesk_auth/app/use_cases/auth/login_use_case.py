"""
Login Use Case

Authenticates email + password and opens a new session.
"""

import bcrypt

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.session_issuer import SessionIssuer, sign_in_error
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.principal import DEFAULT_PROVIDER
from .dtos import LoginResponse

# Verified against when the user is unknown so both paths cost one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - OAuth-only users (no password hash) cannot log in with a password
    - Suspended and anonymized users cannot log in
    - Always creates a NEW session; other devices stay signed in
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with access token, refresh token and public user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or not user.password_hash:
                bcrypt.checkpw(b"dummy_password", _DUMMY_HASH)
                return Return.err(
                    Error("UNAUTHORIZED", "Invalid email or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )
            if not password_valid:
                return Return.err(
                    Error("UNAUTHORIZED", "Invalid email or password")
                )

            disabled = sign_in_error(user)
            if disabled:
                return Return.err(disabled)

            session = await SessionIssuer(self.uow).login(user, provider=DEFAULT_PROVIDER)

            await self.uow.commit()

            return Return.ok(session)
