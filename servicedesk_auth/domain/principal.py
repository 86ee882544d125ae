"""
Authenticated Principal

Identity payload embedded in every access token.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .entities import User, UserRole, UserStatus

DEFAULT_PROVIDER = "credentials"


class AuthenticatedPrincipal(BaseModel):
    """
    Value object carrying exactly the claims of an access token.

    Serialized with camelCase claim names (profileComplete, emailVerified,
    isActive); `sub` is the user id.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    email: str
    sub: str
    role: str
    firstname: str = ""
    lastname: str = ""
    profile_complete: bool = Field(default=False, alias="profileComplete")
    email_verified: bool = Field(default=False, alias="emailVerified")
    status: str
    is_active: bool = Field(default=False, alias="isActive")
    provider: str = DEFAULT_PROVIDER

    @property
    def user_id(self) -> UUID:
        return UUID(self.sub)

    @classmethod
    def from_user(cls, user: User, provider: str = DEFAULT_PROVIDER) -> "AuthenticatedPrincipal":
        return cls(
            email=user.email,
            sub=str(user.id),
            role=UserRole(user.role).value,
            firstname=user.firstname or "",
            lastname=user.lastname or "",
            profile_complete=bool(user.profile_complete),
            email_verified=user.email_verified,
            status=UserStatus(user.status).value,
            is_active=bool(user.is_active),
            provider=provider,
        )

    def to_claims(self) -> dict:
        return self.model_dump(by_alias=True)
