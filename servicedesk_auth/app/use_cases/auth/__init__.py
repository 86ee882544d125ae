"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .send_verification_use_case import SendEmailVerificationUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .complete_profile_use_case import CompleteProfileUseCase
from .oauth_login_use_case import OAuthLoginUseCase
from .link_oauth_account_use_case import LinkOAuthAccountUseCase
from .send_login_code_use_case import SendLoginCodeUseCase
from .verify_login_code_use_case import VerifyLoginCodeUseCase
from .dtos import (
    RegisterCommand,
    OnboardingCommand,
    OAuthProfile,
    MessageResponse,
    LoginResponse,
    CompleteProfileResponse,
    LinkedAccountResponse,
)

__all__ = [
    # Use Cases
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
    # DTOs - Commands
    "RegisterCommand",
    "OnboardingCommand",
    "OAuthProfile",
    # DTOs - Responses
    "MessageResponse",
    "LoginResponse",
    "CompleteProfileResponse",
    "LinkedAccountResponse",
]
