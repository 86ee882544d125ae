"""
Clean Expired Tokens Use Case

Maintenance job purging expired tokens of every kind.
"""

from servicedesk_auth.libs.result import Result, Return
from servicedesk_auth.app.services.token_service import TokenService
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from .dtos import CleanupResponse


class CleanExpiredTokensUseCase:
    """
    Delete expired password reset tokens, verification tokens, refresh tokens
    and login codes. Meant to be triggered by an external scheduler.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[CleanupResponse]:
        async with self.uow:
            report = await TokenService(self.uow).clean_expired_tokens()

            await self.uow.commit()

            return Return.ok(
                CleanupResponse(message="Expired tokens cleaned up", deleted=report)
            )
