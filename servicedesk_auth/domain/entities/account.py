"""
Account Entity

Links a third-party identity provider account to a local user.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from servicedesk_auth.domain.base import utcnow

if TYPE_CHECKING:
    from .user import User


class Account(SQLModel, table=True):
    """
    Account entity - OAuth link between a provider identity and a user.

    Business Rules:
    - (provider, provider_account_id) maps to at most one user
    - A user links a given provider at most once
    - Provider tokens are optional and only stored when the provider returns them
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    provider: str = Field(max_length=50, nullable=False)
    provider_account_id: str = Field(max_length=255, nullable=False)

    provider_access_token: Optional[str] = Field(default=None)
    provider_refresh_token: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    user: "User" = Relationship(back_populates="accounts")

    __table_args__ = (
        Index(
            "idx_account_provider_account",
            "provider",
            "provider_account_id",
            unique=True,
        ),
        Index("idx_account_user_provider", "user_id", "provider", unique=True),
    )
