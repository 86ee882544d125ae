from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from servicedesk_auth.domain.entities import LoginCode


class ILoginCodeRepository(ABC):
    """LoginCode repository interface - application layer"""

    @abstractmethod
    async def replace_for_email(self, login_code: LoginCode) -> LoginCode:
        """Delete any code for login_code.email and insert this one"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[LoginCode]:
        """Get the live login code for an email"""
        pass

    @abstractmethod
    async def increment_attempts(self, email: str) -> int:
        """Add one failed attempt. Returns number of updated rows."""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete all codes for an email. Returns count."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete codes that expired before `now`. Returns count."""
        pass
