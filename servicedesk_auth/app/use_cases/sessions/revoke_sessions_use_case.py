"""
Revoke Sessions Use Cases

Administrative session revocation.
"""

from uuid import UUID

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import RevokedSessionsResponse


class RevokeUserSessionsUseCase:
    """
    Revoke every session of one user.

    Business Rules:
    - User must exist (NOT_FOUND)
    - Revoking a user without sessions succeeds with a count of 0
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
                RevokedSessionsResponse(
                    message=f"Revoked all sessions for user {user.id}",
                    revoked_count=count,
                )
            )


class RevokeAllSessionsUseCase:
    """Revoke every session in the system, forcing all users to sign in again"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[RevokedSessionsResponse]:
        async with self.uow:
            count = await TokenService(self.uow).revoke_all_sessions()

            await self.uow.commit()

            return Return.ok(
                RevokedSessionsResponse(message="Revoked all sessions", revoked_count=count)
            )
