"""
Verify Email Use Case

Handles email verification via secure token.
"""

import logging

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must be valid and carry an email (BAD_REQUEST otherwise)
    - User must exist (NOT_FOUND)
    - Sets email_verified_at and consumes the token (single-use)
    - Promotes the account to verified when the profile is also complete
    - Confirmation email is best-effort
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(self, token: str) -> Result[MessageResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link

        Returns:
            Result with verification message, or Error

        Errors:
            - BAD_REQUEST: Token not found, expired or already used
            - NOT_FOUND: User not found
        """
        async with self.uow:
            tokens = TokenService(self.uow)

            validation = await tokens.validate_email_verification_token(token)
            if not validation.valid or not validation.email:
                await self.uow.commit()
                return Return.err(
                    Error("BAD_REQUEST", "Invalid or expired verification token")
                )

            user = await self.uow.users.get_by_email(validation.email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            await self.uow.users.mark_email_as_verified(user.id)

            consumed = await tokens.consume_email_verification_token(token)
            if consumed.is_err():
                return Return.err(
                    Error("BAD_REQUEST", "Invalid or expired verification token")
                )

            await self.uow.users.attempt_auto_verification(user.id)

            await self.uow.commit()

        try:
            await self.notifications.send_notification(
                user.email,
                user.full_name,
                "Email verified",
                "Your email address has been verified successfully.",
            )
        except Exception as exc:
            logger.warning(f"Verification confirmation failed for user {user.id}: {exc}")

        return Return.ok(MessageResponse(message="Email verified successfully"))
