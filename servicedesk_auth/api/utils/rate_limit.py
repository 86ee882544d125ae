"""
Rate limiting for the public auth endpoints.

Requests are counted per client address with slowapi. Credential and
mail-sending routes carry tighter per-route limits on top of the default.
"""

import logging

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from config import ApplicationConfig

logger = logging.getLogger(__name__)

REGISTER_LIMIT = "20/hour"
LOGIN_LIMIT = "10/minute"
PASSWORD_RESET_LIMIT = "20/hour"
EMAIL_VERIFICATION_LIMIT = "20/hour"
LOGIN_CODE_LIMIT = "5/minute"

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[ApplicationConfig.RATE_LIMIT_DEFAULT],
    storage_uri=ApplicationConfig.RATE_LIMIT_STORAGE_URI,
    enabled=ApplicationConfig.RATE_LIMIT_ENABLED,
)


async def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> Response:
    logger.warning(
        f"Rate limit exceeded for {get_remote_address(request)} on {request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": {
                "code": "TOO_MANY_REQUESTS",
                "message": f"Too many requests. Limit: {exc.detail}",
            }
        },
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )
