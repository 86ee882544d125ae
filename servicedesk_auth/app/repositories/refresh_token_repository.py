from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from servicedesk_auth.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """RefreshToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: RefreshToken) -> RefreshToken:
        """Create a new refresh token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        """Get refresh token by token hash"""
        pass

    @abstractmethod
    async def delete_by_token_hash(self, token_hash: str) -> int:
        """Delete a refresh token. Returns number of deleted rows (0 or 1)."""
        pass

    @abstractmethod
    async def count_valid_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Count non-expired refresh tokens for a user"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all refresh tokens for a user. Returns count."""
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every refresh token. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete refresh tokens that expired before `now`. Returns count."""
        pass
