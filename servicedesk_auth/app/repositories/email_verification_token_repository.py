from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from servicedesk_auth.domain.entities import EmailVerificationToken


class IEmailVerificationTokenRepository(ABC):
    """EmailVerificationToken repository interface - application layer"""

    @abstractmethod
    async def replace_for_identifier(
        self, token: EmailVerificationToken
    ) -> EmailVerificationToken:
        """Delete any token for token.identifier and insert this one"""
        pass

    @abstractmethod
    async def get_by_token_hash(
        self, token_hash: str
    ) -> Optional[EmailVerificationToken]:
        """Get email verification token by token hash"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete an email verification token. Returns number of deleted rows."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens that expired before `now`. Returns count."""
        pass
