"""
Use Cases

Organized by domain folder:
- auth/: Authentication flows
- sessions/: Logout and session administration
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    RefreshTokenUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    SendEmailVerificationUseCase,
    VerifyEmailUseCase,
    CompleteProfileUseCase,
    OAuthLoginUseCase,
    LinkOAuthAccountUseCase,
    SendLoginCodeUseCase,
    VerifyLoginCodeUseCase,
)
from .sessions import (
    LogoutUseCase,
    RevokeUserSessionsUseCase,
    RevokeAllSessionsUseCase,
    CleanExpiredTokensUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "SendEmailVerificationUseCase",
    "VerifyEmailUseCase",
    "CompleteProfileUseCase",
    "OAuthLoginUseCase",
    "LinkOAuthAccountUseCase",
    "SendLoginCodeUseCase",
    "VerifyLoginCodeUseCase",
    # Sessions
    "LogoutUseCase",
    "RevokeUserSessionsUseCase",
    "RevokeAllSessionsUseCase",
    "CleanExpiredTokensUseCase",
]
