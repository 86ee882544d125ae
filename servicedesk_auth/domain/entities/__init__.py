"""
Service Desk Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import UserRole, UserStatus

# Export all entities
from .user import User
from .account import Account
from .refresh_token import RefreshToken
from .password_reset_token import PasswordResetToken
from .email_verification_token import EmailVerificationToken
from .login_code import LoginCode

__all__ = [
    # Enums
    "UserRole",
    "UserStatus",
    # Entities
    "User",
    "Account",
    "RefreshToken",
    "PasswordResetToken",
    "EmailVerificationToken",
    "LoginCode",
]
