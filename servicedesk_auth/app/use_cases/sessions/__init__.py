"""
Session Use Cases

Logout and administrative session management.
"""

from .logout_use_case import LogoutUseCase
from .revoke_sessions_use_case import RevokeUserSessionsUseCase, RevokeAllSessionsUseCase
from .clean_expired_tokens_use_case import CleanExpiredTokensUseCase
from .dtos import RevokedSessionsResponse, CleanupResponse

__all__ = [
    "LogoutUseCase",
    "RevokeUserSessionsUseCase",
    "RevokeAllSessionsUseCase",
    "CleanExpiredTokensUseCase",
    "RevokedSessionsResponse",
    "CleanupResponse",
]
