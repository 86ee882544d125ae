from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from servicedesk_auth.domain.entities import Account


class IAccountRepository(ABC):
    """OAuth account link repository interface - application layer"""

    @abstractmethod
    async def get_by_provider_account(
        self, provider: str, provider_account_id: str
    ) -> Optional[Account]:
        """Get the link for a provider identity"""
        pass

    @abstractmethod
    async def get_by_user_and_provider(
        self, user_id: UUID, provider: str
    ) -> Optional[Account]:
        """Get the link a user holds for a provider"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Account]:
        """Get all links for a user, oldest first"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account link"""
        pass
