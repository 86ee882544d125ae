"""
Request Password Reset Use Case

Generates a password reset token and emails it to the user.
"""

import logging

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset (forgot password).

    Business Rules:
    - User must exist (NOT_FOUND otherwise)
    - Token expires in 1 hour and replaces any previous reset token
    - Token is committed BEFORE the email is sent; a delivery failure is
      reported as BAD_REQUEST but the token row is kept
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with acknowledgement, or Error

        Errors:
            - NOT_FOUND: No user with this email
            - BAD_REQUEST: Reset email could not be sent
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            reset_token = await TokenService(self.uow).create_password_reset_token(email)

            await self.uow.commit()

        try:
            await self.notifications.send_password_reset_email(
                user.email, user.full_name, reset_token
            )
        except Exception as exc:
            logger.error(f"Password reset email failed for user {user.id}: {exc}")
            return Return.err(
                Error("BAD_REQUEST", "Error sending password reset email")
            )

        return Return.ok(
            MessageResponse(message="Password reset email sent")
        )
