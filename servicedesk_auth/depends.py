from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from servicedesk_auth.adapter.services.notification_gateway import HttpNotificationGateway
from servicedesk_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from servicedesk_auth.api.error import to_http_error
from servicedesk_auth.app.services.access_token_validator import AccessTokenValidator
from servicedesk_auth.app.services.notification_gateway import INotificationGateway
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.principal import AuthenticatedPrincipal

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_gateway() -> INotificationGateway:
    return HttpNotificationGateway(
        api_url=ApplicationConfig.EMAIL_API_URL,
        api_key=ApplicationConfig.EMAIL_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
        frontend_url=ApplicationConfig.FRONTEND_URL,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AuthenticatedPrincipal:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Principal carried by the token

    Raises:
        ClientError: 401 if the token is invalid, expired, orphaned or revoked
    """
    validator = AccessTokenValidator(
        uow, enforce_session_revocation=ApplicationConfig.ENFORCE_SESSION_REVOCATION
    )
    result = await validator.validate(credentials.credentials)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
