from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.refresh_token_repository import (
    IRefreshTokenRepository,
)
from servicedesk_auth.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: RefreshToken) -> RefreshToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[RefreshToken]:
        stmt = select(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_token_hash(self, token_hash: str) -> int:
        # Row count decides which of two concurrent consumers wins
        stmt = delete(RefreshToken).where(RefreshToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def count_valid_by_user_id(self, user_id: UUID, now: datetime) -> int:
        stmt = select(func.count(RefreshToken.id)).where(
            RefreshToken.user_id == user_id, RefreshToken.expires_at > now
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def delete_by_user_id(self, user_id: UUID) -> int:
        stmt = delete(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(RefreshToken))
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(RefreshToken).where(RefreshToken.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
