"""
Send Email Verification Use Case

Issues an email verification token and emails the link.
"""

import logging

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class SendEmailVerificationUseCase:
    """
    Use case for sending (or resending) the email verification link.

    Business Rules:
    - User must exist (NOT_FOUND)
    - Already verified users are rejected (BAD_REQUEST)
    - Token expires in 24 hours and replaces any previous one
    - Delivery failure is reported as BAD_REQUEST; the token row is kept
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            if user.email_verified:
                return Return.err(Error("BAD_REQUEST", "Email is already verified"))

            verification_token = await TokenService(
                self.uow
            ).create_email_verification_token(email)

            await self.uow.commit()

        try:
            await self.notifications.send_email_verification(
                user.email, user.full_name, verification_token
            )
        except Exception as exc:
            logger.error(f"Verification email failed for user {user.id}: {exc}")
            return Return.err(Error("BAD_REQUEST", "Error sending verification email"))

        return Return.ok(MessageResponse(message="Verification email sent"))
