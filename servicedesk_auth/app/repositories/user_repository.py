from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from servicedesk_auth.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer (credential store)"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash"""
        pass

    @abstractmethod
    async def mark_email_as_verified(self, user_id: UUID) -> None:
        """Stamp email_verified_at with the current time"""
        pass

    @abstractmethod
    async def update_session_status(self, user_id: UUID, is_active: bool) -> None:
        """Set the session-open flag"""
        pass

    @abstractmethod
    async def attempt_auto_verification(self, user_id: UUID) -> bool:
        """
        Promote a pending user to verified once the email is verified and the
        profile is complete. Returns True if the status changed.
        """
        pass
