"""
Admin API Key Authentication

Validates admin API keys for session administration endpoints.
"""

import hmac

from fastapi import Header, status

from config import ApplicationConfig
from servicedesk_auth.libs.result import Error
from servicedesk_auth.api.error import ClientError


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by operators and schedulers (e.g. the expired token cleanup job).
    Different from user JWT authentication - this is service-to-service auth.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not hmac.compare_digest(x_admin_api_key, ApplicationConfig.ADMIN_API_KEY):
        raise ClientError(
            Error("UNAUTHORIZED", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
