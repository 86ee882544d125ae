from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.adapter.repositories.account_repository import AccountRepository
from servicedesk_auth.adapter.repositories.email_verification_token_repository import (
    EmailVerificationTokenRepository,
)
from servicedesk_auth.adapter.repositories.login_code_repository import LoginCodeRepository
from servicedesk_auth.adapter.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from servicedesk_auth.adapter.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from servicedesk_auth.adapter.repositories.user_repository import UserRepository
from servicedesk_auth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.accounts = AccountRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.email_verification_tokens = EmailVerificationTokenRepository(self.session)
        self.login_codes = LoginCodeRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed explicitly is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
