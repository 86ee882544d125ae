"""
Send Login Code Use Case

Emails a one-time 6-digit sign-in code.
"""

import logging

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class SendLoginCodeUseCase:
    """
    Use case for passwordless sign-in, step one.

    Business Rules:
    - User must exist (NOT_FOUND)
    - Code valid for 10 minutes, replaces any earlier code for the email
    - Delivery is best-effort
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            code = await TokenService(self.uow).create_login_code(email)

            await self.uow.commit()

        try:
            await self.notifications.send_login_code_email(
                user.email, user.full_name, code
            )
        except Exception as exc:
            logger.warning(f"Login code email failed for user {user.id}: {exc}")

        return Return.ok(MessageResponse(message="Login code sent"))
