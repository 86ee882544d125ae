"""
Link OAuth Account Use Case

Attaches a provider identity to an already signed-in user.
"""

from uuid import UUID

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.entities import Account
from .dtos import LinkedAccountResponse, OAuthProfile


class LinkOAuthAccountUseCase:
    """
    Use case for linking an OAuth account to an existing user.

    Business Rules:
    - User must exist (NOT_FOUND)
    - A provider identity belongs to at most one user (CONFLICT)
    - A user links each provider at most once, relinking included (CONFLICT)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, provider: str, profile: OAuthProfile
    ) -> Result[LinkedAccountResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("NOT_FOUND", "User not found"))

            existing = await self.uow.accounts.get_by_provider_account(
                provider, profile.provider_account_id
            )
            if existing is not None and existing.user_id != user.id:
                return Return.err(
                    Error("CONFLICT", "This account is already linked to another user")
                )

            if await self.uow.accounts.get_by_user_and_provider(user.id, provider):
                return Return.err(
                    Error("CONFLICT", f"A {provider} account is already linked")
                )

            account = await self.uow.accounts.create(
                Account(
                    user_id=user.id,
                    provider=provider,
                    provider_account_id=profile.provider_account_id,
                    provider_access_token=profile.access_token,
                    provider_refresh_token=profile.refresh_token,
                )
            )

            await self.uow.commit()

            return Return.ok(
                LinkedAccountResponse(
                    provider=account.provider,
                    provider_account_id=account.provider_account_id,
                    user_id=str(account.user_id),
                )
            )
