"""
Session Use Case DTOs
"""

from pydantic import BaseModel

from servicedesk_auth.app.services.token_service import CleanupReport


class RevokedSessionsResponse(BaseModel):
    """Number of refresh tokens deleted by a revocation"""

    message: str
    revoked_count: int


class CleanupResponse(BaseModel):
    message: str
    deleted: CleanupReport
