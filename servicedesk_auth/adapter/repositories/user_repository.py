from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.user_repository import IUserRepository
from servicedesk_auth.domain.base import utcnow
from servicedesk_auth.domain.entities import User, UserStatus


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_password(self, user_id: UUID, password_hash: str) -> None:
        user = await self.get_by_id(user_id)
        if user is None:
            return
        user.password_hash = password_hash
        await self.update(user)

    async def mark_email_as_verified(self, user_id: UUID) -> None:
        user = await self.get_by_id(user_id)
        if user is None:
            return
        user.email_verified_at = utcnow()
        await self.update(user)

    async def update_session_status(self, user_id: UUID, is_active: bool) -> None:
        user = await self.get_by_id(user_id)
        if user is None:
            return
        user.is_active = is_active
        if is_active:
            user.last_login_at = utcnow()
        await self.update(user)

    async def attempt_auto_verification(self, user_id: UUID) -> bool:
        user = await self.get_by_id(user_id)
        if user is None or user.status != UserStatus.pending:
            return False
        if not (user.email_verified and user.profile_complete):
            return False
        user.status = UserStatus.verified
        await self.update(user)
        return True
