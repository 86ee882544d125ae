from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from servicedesk_auth.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def replace_for_email(self, token: PasswordResetToken) -> PasswordResetToken:
        """Delete any token for token.email and insert this one"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete a password reset token. Returns number of deleted rows."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens that expired before `now`. Returns count."""
        pass
