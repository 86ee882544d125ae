"""
LoginCode Entity

One-time numeric codes for passwordless sign-in.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from servicedesk_auth.domain.base import utcnow


class LoginCode(SQLModel, table=True):
    """
    LoginCode entity - 6-digit code sent by email.

    Business Rules:
    - Expires after 10 minutes
    - At most one live code per email, a new request replaces it
    - Invalid once 5 failed attempts have been recorded
    """

    __tablename__ = "login_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    email: str = Field(unique=True, max_length=255)
    code: str = Field(max_length=6)
    attempts: int = Field(default=0)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_login_code_expires_at", "expires_at"),)
