from abc import ABC, abstractmethod

from servicedesk_auth.app.repositories.account_repository import IAccountRepository
from servicedesk_auth.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from servicedesk_auth.app.repositories.login_code_repository import ILoginCodeRepository
from servicedesk_auth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from servicedesk_auth.app.repositories.refresh_token_repository import (
    IRefreshTokenRepository,
)
from servicedesk_auth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    accounts: IAccountRepository
    refresh_tokens: IRefreshTokenRepository
    password_reset_tokens: IPasswordResetTokenRepository
    email_verification_tokens: IEmailVerificationTokenRepository
    login_codes: ILoginCodeRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
