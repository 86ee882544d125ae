from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.app.repositories.account_repository import IAccountRepository
from servicedesk_auth.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_provider_account(
        self, provider: str, provider_account_id: str
    ) -> Optional[Account]:
        stmt = select(Account).where(
            Account.provider == provider,
            Account.provider_account_id == provider_account_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[Account]:
        stmt = select(Account).where(
            Account.user_id == user_id, Account.provider == provider
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[Account]:
        stmt = (
            select(Account)
            .where(Account.user_id == user_id)
            .order_by(Account.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, account: Account) -> Account:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
