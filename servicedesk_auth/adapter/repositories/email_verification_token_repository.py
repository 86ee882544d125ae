from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from servicedesk_auth.domain.entities import EmailVerificationToken


class EmailVerificationTokenRepository(IEmailVerificationTokenRepository):
    """EmailVerificationToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_for_identifier(
        self, token: EmailVerificationToken
    ) -> EmailVerificationToken:
        await self.session.execute(
            delete(EmailVerificationToken).where(
                EmailVerificationToken.identifier == token.identifier
            )
        )
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(
        self, token_hash: str
    ) -> Optional[EmailVerificationToken]:
        stmt = select(EmailVerificationToken).where(
            EmailVerificationToken.token_hash == token_hash
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_token_hash(self, token_hash: str) -> int:
        stmt = delete(EmailVerificationToken).where(
            EmailVerificationToken.token_hash == token_hash
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(EmailVerificationToken).where(
            EmailVerificationToken.expires_at < now
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
