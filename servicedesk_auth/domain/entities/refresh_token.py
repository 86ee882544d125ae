"""
RefreshToken Entity

Server-side record of an open session.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from servicedesk_auth.domain.base import utcnow


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one row per active session/device.

    Business Rules:
    - Token is stored as a SHA-256 digest, the raw value is only returned once
    - Many rows per user (concurrent sessions are allowed)
    - Rotated on refresh: the presented row is deleted, a new one created
    - Expires after 7 days
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_refresh_token_expires_at", "expires_at"),)
