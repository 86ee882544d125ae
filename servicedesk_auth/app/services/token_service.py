"""
Token Service

Generates, validates, consumes, revokes and purges every kind of token the
authentication flows rely on: password reset, email verification, refresh
and login code.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import timedelta
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from servicedesk_auth.libs.result import Error, Result, Return
from servicedesk_auth.app.services.unit_of_work import UnitOfWork
from servicedesk_auth.domain.base import utcnow
from servicedesk_auth.domain.entities import (
    EmailVerificationToken,
    LoginCode,
    PasswordResetToken,
    RefreshToken,
)

logger = logging.getLogger(__name__)


class TokenValidation(BaseModel):
    """Outcome of a token validation. Subject fields are set only when valid."""

    valid: bool
    email: Optional[str] = None
    user_id: Optional[UUID] = None


class CleanupReport(BaseModel):
    """Number of expired rows deleted per token kind"""

    password_reset_tokens: int
    verification_tokens: int
    refresh_tokens: int
    login_codes: int


INVALID = TokenValidation(valid=False)


class TokenService:
    """
    Service for token lifecycle operations.

    Business Rules:
    - Raw tokens are returned once; only SHA-256 digests are stored
    - Validation of a missing token is invalid; an expired token is deleted
      and reported invalid
    - Consumption deletes the row and fails if nothing was deleted, so two
      consumers of the same token cannot both succeed
    - Never commits: the calling use case owns the transaction
    """

    TOKEN_BYTES = 32
    PASSWORD_RESET_TTL = timedelta(hours=1)
    EMAIL_VERIFICATION_TTL = timedelta(hours=24)
    REFRESH_TOKEN_TTL = timedelta(days=7)
    LOGIN_CODE_TTL = timedelta(minutes=10)
    LOGIN_CODE_MAX_ATTEMPTS = 5

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    # ==================== Primitives ====================

    @classmethod
    def generate_opaque_token(cls) -> str:
        """64 hex chars from a CSPRNG"""
        return secrets.token_hex(cls.TOKEN_BYTES)

    @staticmethod
    def hash_token(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    @staticmethod
    def generate_login_code() -> str:
        return f"{secrets.randbelow(900000) + 100000}"

    @staticmethod
    def _token_not_found() -> Result[None]:
        return Return.err(Error("TOKEN_NOT_FOUND", "Token not found"))

    # ==================== Password Reset ====================

    async def create_password_reset_token(self, email: str) -> str:
        token = self.generate_opaque_token()
        await self.uow.password_reset_tokens.replace_for_email(
            PasswordResetToken(
                email=email,
                token_hash=self.hash_token(token),
                expires_at=utcnow() + self.PASSWORD_RESET_TTL,
            )
        )
        return token

    async def validate_password_reset_token(self, token: str) -> TokenValidation:
        token_hash = self.hash_token(token)
        record = await self.uow.password_reset_tokens.get_by_token_hash(token_hash)
        if record is None:
            return INVALID

        if record.expires_at < utcnow():
            await self.uow.password_reset_tokens.delete_by_token_hash(token_hash)
            return INVALID

        return TokenValidation(valid=True, email=record.email)

    async def consume_password_reset_token(self, token: str) -> Result[None]:
        deleted = await self.uow.password_reset_tokens.delete_by_token_hash(
            self.hash_token(token)
        )
        if deleted == 0:
            return self._token_not_found()
        return Return.ok(None)

    # ==================== Email Verification ====================

    async def create_email_verification_token(self, email: str) -> str:
        token = self.generate_opaque_token()
        await self.uow.email_verification_tokens.replace_for_identifier(
            EmailVerificationToken(
                identifier=email,
                token_hash=self.hash_token(token),
                expires_at=utcnow() + self.EMAIL_VERIFICATION_TTL,
            )
        )
        return token

    async def validate_email_verification_token(self, token: str) -> TokenValidation:
        token_hash = self.hash_token(token)
        record = await self.uow.email_verification_tokens.get_by_token_hash(token_hash)
        if record is None:
            return INVALID

        if record.expires_at < utcnow():
            await self.uow.email_verification_tokens.delete_by_token_hash(token_hash)
            return INVALID

        return TokenValidation(valid=True, email=record.identifier)

    async def consume_email_verification_token(self, token: str) -> Result[None]:
        deleted = await self.uow.email_verification_tokens.delete_by_token_hash(
            self.hash_token(token)
        )
        if deleted == 0:
            return self._token_not_found()
        return Return.ok(None)

    # ==================== Refresh Tokens ====================

    async def create_refresh_token(self, user_id: UUID) -> str:
        """Mint a new session row. Existing sessions of the user are untouched."""
        token = self.generate_opaque_token()
        await self.uow.refresh_tokens.create(
            RefreshToken(
                user_id=user_id,
                token_hash=self.hash_token(token),
                expires_at=utcnow() + self.REFRESH_TOKEN_TTL,
            )
        )
        return token

    async def validate_refresh_token(self, token: str) -> TokenValidation:
        token_hash = self.hash_token(token)
        record = await self.uow.refresh_tokens.get_by_token_hash(token_hash)
        if record is None:
            return INVALID

        if record.expires_at < utcnow():
            await self.uow.refresh_tokens.delete_by_token_hash(token_hash)
            return INVALID

        return TokenValidation(valid=True, user_id=record.user_id)

    async def consume_refresh_token(self, token: str) -> Result[None]:
        deleted = await self.uow.refresh_tokens.delete_by_token_hash(
            self.hash_token(token)
        )
        if deleted == 0:
            return self._token_not_found()
        return Return.ok(None)

    async def user_has_valid_refresh_tokens(self, user_id: UUID) -> bool:
        count = await self.uow.refresh_tokens.count_valid_by_user_id(user_id, utcnow())
        return count > 0

    async def revoke_all_user_sessions(self, user_id: UUID) -> int:
        count = await self.uow.refresh_tokens.delete_by_user_id(user_id)
        logger.info(f"Revoked {count} session(s) for user {user_id}")
        return count

    async def revoke_all_sessions(self) -> int:
        count = await self.uow.refresh_tokens.delete_all()
        logger.warning(f"Revoked all sessions ({count} refresh tokens)")
        return count

    # ==================== Login Codes ====================

    async def create_login_code(self, email: str) -> str:
        code = self.generate_login_code()
        await self.uow.login_codes.replace_for_email(
            LoginCode(
                email=email,
                code=code,
                attempts=0,
                expires_at=utcnow() + self.LOGIN_CODE_TTL,
            )
        )
        return code

    async def validate_login_code(self, email: str, code: str) -> TokenValidation:
        """Checks the code without consuming it. Failed attempts are counted by the caller."""
        record = await self.uow.login_codes.get_by_email(email)
        if record is None:
            return INVALID

        if record.expires_at < utcnow():
            await self.uow.login_codes.delete_by_email(email)
            return INVALID

        if record.attempts >= self.LOGIN_CODE_MAX_ATTEMPTS:
            await self.uow.login_codes.delete_by_email(email)
            return INVALID

        if not hmac.compare_digest(record.code, code):
            return INVALID

        return TokenValidation(valid=True, email=email)

    async def increment_login_code_attempts(self, email: str) -> None:
        await self.uow.login_codes.increment_attempts(email)

    async def consume_login_code(self, email: str) -> int:
        return await self.uow.login_codes.delete_by_email(email)

    # ==================== Maintenance ====================

    async def clean_expired_tokens(self) -> CleanupReport:
        """Delete expired rows of every kind. Safe to run at any time."""
        now = utcnow()
        report = CleanupReport(
            password_reset_tokens=await self.uow.password_reset_tokens.delete_expired(now),
            verification_tokens=await self.uow.email_verification_tokens.delete_expired(now),
            refresh_tokens=await self.uow.refresh_tokens.delete_expired(now),
            login_codes=await self.uow.login_codes.delete_expired(now),
        )
        logger.info(f"Expired token cleanup: {report.model_dump()}")
        return report
