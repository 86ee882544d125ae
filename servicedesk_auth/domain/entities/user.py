"""
User Entity

Represents a person who can sign in to the service desk.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from servicedesk_auth.domain.base import utcnow
from .enums import UserRole, UserStatus

if TYPE_CHECKING:
    from .account import Account


class User(SQLModel, table=True):
    """
    User entity - represents a person who can sign in to the service desk.

    Business Rules:
    - Email must be unique across all users
    - password_hash is NULL for accounts created through an OAuth provider
    - Status moves pending -> verified once the email is verified AND the
      profile is complete
    - is_active tracks whether the user has an open session
    - Never deleted by the authentication flows
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt

    firstname: str = Field(default="", max_length=100)
    lastname: str = Field(default="", max_length=100)

    role: UserRole = Field(default=UserRole.client)
    status: UserStatus = Field(default=UserStatus.pending)

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )
    profile_complete: bool = Field(default=False)
    is_active: bool = Field(default=False)

    # Onboarding data
    phone: Optional[str] = Field(default=None, max_length=50)
    company: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    accounts: list["Account"] = Relationship(back_populates="user")

    __table_args__ = (Index("idx_user_status", "status"),)

    @property
    def email_verified(self) -> bool:
        return self.email_verified_at is not None

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()
