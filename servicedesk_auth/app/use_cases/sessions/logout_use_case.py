"""
Logout Use Case

Ends every session of the calling user.
"""

from uuid import UUID

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import RevokedSessionsResponse


class LogoutUseCase:
    """
    Use case for signing out.

    Business Rules:
    - Deletes all refresh tokens of the user, on every device
    - Marks the user's session flag inactive
    - Outstanding access tokens stay valid until expiry unless session
      revocation is enforced by the access token validator
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[RevokedSessionsResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            count = await TokenService(self.uow).revoke_all_user_sessions(user.id)
            await self.uow.users.update_session_status(user.id, False)

            await self.uow.commit()

            return Return.ok(
                RevokedSessionsResponse(message="Logged out successfully", revoked_count=count)
            )
