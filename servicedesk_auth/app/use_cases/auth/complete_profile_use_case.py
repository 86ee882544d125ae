"""
Complete Profile Use Case

Stores onboarding data and promotes the account once it is fully verified.
"""

import logging
from uuid import UUID

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.session_issuer import PublicUser
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import CompleteProfileResponse, OnboardingCommand

logger = logging.getLogger(__name__)


class CompleteProfileUseCase:
    """
    Use case for completing the user profile after sign-up.

    Business Rules:
    - User must exist (NOT_FOUND)
    - Only fields present in the command overwrite stored values
    - Sets profile_complete, then attempts pending -> verified promotion
    - Notification is best-effort
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationGateway):
        self.uow = uow
        self.notifications = notifications

    async def execute(
        self, user_id: UUID, command: OnboardingCommand
    ) -> Result[CompleteProfileResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            for field, value in command.model_dump(exclude_none=True).items():
                setattr(user, field, value)
            user.profile_complete = True
            await self.uow.users.update(user)

            await self.uow.users.attempt_auto_verification(user.id)

            await self.uow.commit()

        try:
            await self.notifications.send_notification(
                user.email,
                user.full_name,
                "Profile completed",
                "Thanks for completing your profile. You can now submit service requests.",
            )
        except Exception as exc:
            logger.warning(f"Profile completion notice failed for user {user.id}: {exc}")

        return Return.ok(
            CompleteProfileResponse(
                message="Profile completed successfully",
                user=PublicUser.from_user(user),
            )
        )
