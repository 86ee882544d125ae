"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from servicedesk_auth.app.services.session_issuer import PublicUser, SessionTokens


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    email: str
    password: str
    firstname: str = ""
    lastname: str = ""


class OnboardingCommand(BaseModel):
    """Profile fields collected during onboarding; unset fields are left alone"""

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    address: Optional[str] = None


class OAuthProfile(BaseModel):
    """Identity returned by an OAuth provider"""

    provider_account_id: str
    email: str
    firstname: str = ""
    lastname: str = ""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class MessageResponse(BaseModel):
    """Plain acknowledgement for flows that return no data"""

    message: str


# Login, refresh, login-code and OAuth login all hand out a session
LoginResponse = SessionTokens


class CompleteProfileResponse(BaseModel):
    """Response for complete profile use case"""

    message: str
    user: PublicUser


class LinkedAccountResponse(BaseModel):
    """Response for OAuth account linking"""

    provider: str
    provider_account_id: str
    user_id: str
