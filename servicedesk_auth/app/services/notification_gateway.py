from abc import ABC, abstractmethod
from typing import Optional


class NotificationDeliveryError(Exception):
    """Raised when a transactional email could not be handed to the provider"""

    pass


class INotificationGateway(ABC):
    """
    Transactional email side channel - application layer.

    Every method raises NotificationDeliveryError on failure; callers decide
    whether a failure is fatal for their flow.
    """

    @abstractmethod
    async def send_welcome_email(self, email: str, name: str) -> None:
        pass

    @abstractmethod
    async def send_password_reset_email(self, email: str, name: str, token: str) -> None:
        pass

    @abstractmethod
    async def send_email_verification(self, email: str, name: str, token: str) -> None:
        pass

    @abstractmethod
    async def send_login_code_email(self, email: str, name: str, code: str) -> None:
        pass

    @abstractmethod
    async def send_notification(
        self,
        email: str,
        name: str,
        title: str,
        message: str,
        action_text: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> None:
        pass
