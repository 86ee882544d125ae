"""
EmailVerificationToken Entity

Single-use tokens proving ownership of an email address.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from servicedesk_auth.domain.base import utcnow


class EmailVerificationToken(SQLModel, table=True):
    """
    EmailVerificationToken entity - email ownership proof.

    Business Rules:
    - Expires after 24 hours
    - identifier is the email address being verified (one live token each)
    - Token is stored as a SHA-256 digest
    - Single-use: deleted when consumed
    """

    __tablename__ = "email_verification_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identifier: str = Field(unique=True, max_length=255)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_email_verification_expires_at", "expires_at"),)
