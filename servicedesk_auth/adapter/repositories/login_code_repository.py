from datetime import datetime
from typing import Optional

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.login_code_repository import ILoginCodeRepository
from servicedesk_auth.domain.entities import LoginCode


class LoginCodeRepository(ILoginCodeRepository):
    """LoginCode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace_for_email(self, login_code: LoginCode) -> LoginCode:
        await self.session.execute(
            delete(LoginCode).where(LoginCode.email == login_code.email)
        )
        self.session.add(login_code)
        await self.session.flush()
        await self.session.refresh(login_code)
        return login_code

    async def get_by_email(self, email: str) -> Optional[LoginCode]:
        stmt = (
            select(LoginCode)
            .where(LoginCode.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def increment_attempts(self, email: str) -> int:
        # Single UPDATE so concurrent failures are all counted
        stmt = (
            update(LoginCode)
            .where(LoginCode.email == email)
            .values(attempts=LoginCode.attempts + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(LoginCode).where(LoginCode.email == email)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(LoginCode).where(LoginCode.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
