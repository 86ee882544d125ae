"""
Register Use Case

Creates a password account and sends a best-effort welcome email.
"""

import logging

import bcrypt

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.session_issuer import PublicUser
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.entities import User, UserRole, UserStatus
from .dtos import RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Email must not already be registered (CONFLICT)
    - Password hashed with bcrypt cost factor 12
    - New users start as role=client, status=pending, no session open
    - Welcome email failure is logged and never fails registration
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(self, command: RegisterCommand) -> Result[PublicUser]:
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("CONFLICT", "User with this email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                firstname=command.firstname,
                lastname=command.lastname,
                role=UserRole.client,
                status=UserStatus.pending,
            )
            user = await self.uow.users.create(user)

            await self.uow.commit()

        try:
            await self.notifications.send_welcome_email(user.email, user.full_name)
        except Exception as exc:
            logger.warning(f"Welcome email failed for user {user.id}: {exc}")

        return Return.ok(PublicUser.from_user(user))
