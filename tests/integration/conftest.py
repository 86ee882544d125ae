from typing import List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from servicedesk_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from servicedesk_auth.api.utils.rate_limit import limiter
from servicedesk_auth.app.services.notification_gateway import (
    INotificationGateway,
    NotificationDeliveryError,
)
from servicedesk_auth.depends import get_notification_gateway, get_unit_of_work
from servicedesk_auth.domain import entities  # noqa: F401  registers tables


class RecordingNotificationGateway(INotificationGateway):
    """Keeps every message in memory; set `fail` to simulate a provider outage"""

    def __init__(self):
        self.sent: List[Tuple[str, str, tuple]] = []
        self.fail = False

    async def _record(self, kind: str, email: str, *payload) -> None:
        if self.fail:
            raise NotificationDeliveryError("provider unavailable")
        self.sent.append((kind, email, payload))

    def last(self, kind: str, email: str) -> tuple:
        for sent_kind, sent_email, payload in reversed(self.sent):
            if sent_kind == kind and sent_email == email:
                return payload
        raise AssertionError(f"No {kind} sent to {email}")

    async def send_welcome_email(self, email: str, name: str) -> None:
        await self._record("welcome", email, name)

    async def send_password_reset_email(self, email: str, name: str, token: str) -> None:
        await self._record("password_reset", email, token)

    async def send_email_verification(self, email: str, name: str, token: str) -> None:
        await self._record("email_verification", email, token)

    async def send_login_code_email(self, email: str, name: str, code: str) -> None:
        await self._record("login_code", email, code)

    async def send_notification(
        self,
        email: str,
        name: str,
        title: str,
        message: str,
        action_text: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> None:
        await self._record("notification", email, title)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def notifications():
    return RecordingNotificationGateway()


@pytest_asyncio.fixture
async def client(db_session, notifications):
    from httpx import ASGITransport
    from servicedesk_auth.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notification_gateway] = lambda: notifications
    limiter.enabled = False

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def rate_limiting(client):
    """Turns request counting on for one test; the client fixture leaves it off"""
    limiter.reset()
    limiter.enabled = True
    yield limiter
    limiter.enabled = False
    limiter.reset()
