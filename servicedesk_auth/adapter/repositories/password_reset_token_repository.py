from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from servicedesk_auth.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_for_email(self, token: PasswordResetToken) -> PasswordResetToken:
        """Delete then insert in the caller's transaction; email is unique"""
        await self.session.execute(
            delete(PasswordResetToken).where(PasswordResetToken.email == token.email)
        )
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_token_hash(self, token_hash: str) -> int:
        stmt = delete(PasswordResetToken).where(
            PasswordResetToken.token_hash == token_hash
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
