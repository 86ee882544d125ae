"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import logging

import bcrypt

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token must be valid and carry an email (BAD_REQUEST otherwise)
    - User must exist (NOT_FOUND)
    - New password must be at least 8 characters
    - Password is hashed with bcrypt (cost factor 12)
    - Token is consumed in the same transaction as the password change; if a
      concurrent reset consumed it first, nothing is written
    - Confirmation email is best-effort
    """

    MIN_PASSWORD_LENGTH = 8

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < self.MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "BAD_REQUEST",
                    f"Password must be at least {self.MIN_PASSWORD_LENGTH} characters long",
                )
            )
        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation message, or Error

        Errors:
            - BAD_REQUEST: Invalid/expired token or weak password
            - NOT_FOUND: User no longer exists
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            tokens = TokenService(self.uow)

            validation = await tokens.validate_password_reset_token(token)
            if not validation.valid or not validation.email:
                await self.uow.commit()
                return Return.err(
                    Error("BAD_REQUEST", "Invalid or expired password reset token")
                )

            user = await self.uow.users.get_by_email(validation.email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            await self.uow.users.update_password(user.id, password_hash.decode())

            consumed = await tokens.consume_password_reset_token(token)
            if consumed.is_err():
                return Return.err(
                    Error("BAD_REQUEST", "Invalid or expired password reset token")
                )

            await self.uow.commit()

        try:
            await self.notifications.send_notification(
                user.email,
                user.full_name,
                "Password changed",
                "Your password has been reset successfully. If this wasn't you, contact support immediately.",
            )
        except Exception as exc:
            logger.warning(f"Password reset confirmation failed for user {user.id}: {exc}")

        return Return.ok(
            MessageResponse(message="Password has been reset successfully")
        )
