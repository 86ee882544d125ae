from uuid import UUID

from fastapi import APIRouter, Depends, status

from servicedesk_auth.api.error import to_http_error
from servicedesk_auth.api.utils.admin_auth import verify_admin_api_key
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.app.use_cases.sessions import (
    CleanExpiredTokensUseCase,
    CleanupResponse,
    RevokeAllSessionsUseCase,
    RevokedSessionsResponse,
    RevokeUserSessionsUseCase,
)
from servicedesk_auth.depends import get_unit_of_work

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.delete(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokedSessionsResponse,
)
async def revoke_all_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Revoke every session in the system.

    Every user must sign in again. Access tokens already issued stay valid
    until expiry unless session revocation is enforced.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    result = await RevokeAllSessionsUseCase(uow).execute()

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete(
    "/user/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokedSessionsResponse,
)
async def revoke_user_sessions(user_id: UUID, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Revoke all sessions of one user (account compromise, offboarding).

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: User not found
    """
    result = await RevokeUserSessionsUseCase(uow).execute(user_id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/cleanup", status_code=status.HTTP_200_OK, response_model=CleanupResponse)
async def clean_expired_tokens(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Purge expired tokens of every kind. Intended for a periodic scheduler.

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
    """
    result = await CleanExpiredTokensUseCase(uow).execute()

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
