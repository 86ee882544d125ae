"""
OAuth Login Use Case

Resolves a provider identity to a local user and opens a session.
"""

import logging

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.session_issuer import SessionIssuer, sign_in_error
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.base import utcnow
from servicedesk_auth.domain.entities import Account, User, UserRole, UserStatus
from .dtos import LoginResponse, OAuthProfile

logger = logging.getLogger(__name__)


class OAuthLoginUseCase:
    """
    Use case for signing in through an OAuth provider.

    Business Rules:
    - An existing (provider, provider_account_id) link logs in its owner
    - Otherwise a user with the same email gets the link added, unless that
      user already has a different identity of the same provider (CONFLICT)
    - Otherwise a new user is created: email already verified (the provider
      vouched for it), profile incomplete, role client, no password
    - Suspended and anonymized users cannot sign in (UNAUTHORIZED)
    - The session carries the provider used to sign in
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, provider: str, profile: OAuthProfile) -> Result[LoginResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_provider_account(
                provider, profile.provider_account_id
            )

            if account is not None:
                user = await self.uow.users.get_by_id(account.user_id)
                if user is None:
                    return Return.err(Error("NOT_FOUND", "User not found"))
            else:
                user = await self.uow.users.get_by_email(profile.email)
                if user is None:
                    user = await self.uow.users.create(
                        User(
                            email=profile.email,
                            firstname=profile.firstname,
                            lastname=profile.lastname,
                            role=UserRole.client,
                            status=UserStatus.pending,
                            email_verified_at=utcnow(),
                            profile_complete=False,
                        )
                    )
                    logger.info(f"Created user {user.id} from {provider} sign-in")
                elif await self.uow.accounts.get_by_user_and_provider(user.id, provider):
                    return Return.err(
                        Error("CONFLICT", f"A different {provider} account is already linked")
                    )

                await self.uow.accounts.create(
                    Account(
                        user_id=user.id,
                        provider=provider,
                        provider_account_id=profile.provider_account_id,
                        provider_access_token=profile.access_token,
                        provider_refresh_token=profile.refresh_token,
                    )
                )

            disabled = sign_in_error(user)
            if disabled:
                return Return.err(disabled)

            session = await SessionIssuer(self.uow).login(user, provider=provider)

            await self.uow.commit()

            return Return.ok(session)
