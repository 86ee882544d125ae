"""
HTTP notification gateway.

Posts transactional emails to a JSON email API (Resend-style
`POST {url}` with a bearer key). When no API URL is configured the
message is logged instead, which is the development default.
"""

import html
import logging
from typing import Optional

import httpx

from servicedesk_auth.app.services.notification_gateway import (
    INotificationGateway,
    NotificationDeliveryError,
)

logger = logging.getLogger(__name__)


class HttpNotificationGateway(INotificationGateway):
    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender: str,
        frontend_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.frontend_url = frontend_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url)

    @staticmethod
    def _redact_email(email: str) -> str:
        if "@" not in email:
            return "redacted"
        local, domain = email.split("@", 1)
        return f"{local[:2]}***@{domain}"

    @staticmethod
    def _greeting(email: str, name: str) -> str:
        return html.escape(name or email)

    async def _send(self, to: str, subject: str, body: str) -> None:
        if not self.is_configured:
            logger.info(f"Email (dev mode) to={self._redact_email(to)} subject={subject!r}")
            return

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={"from": self.sender, "to": [to], "subject": subject, "html": body},
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error(f"Email delivery failed to={self._redact_email(to)}: {exc}")
            raise NotificationDeliveryError(str(exc)) from exc

        logger.info(f"Email sent to={self._redact_email(to)} subject={subject!r}")

    async def send_welcome_email(self, email: str, name: str) -> None:
        login_url = f"{self.frontend_url}/auth/login"
        await self._send(
            email,
            "Welcome to Service Desk",
            f"<p>Hi {self._greeting(email, name)},</p>"
            f"<p>Your account is ready. <a href=\"{html.escape(login_url)}\">Sign in</a> to get started.</p>",
        )

    async def send_password_reset_email(self, email: str, name: str, token: str) -> None:
        reset_url = f"{self.frontend_url}/auth/reset-password?token={token}"
        await self._send(
            email,
            "Reset your password",
            f"<p>Hi {self._greeting(email, name)},</p>"
            f"<p><a href=\"{html.escape(reset_url)}\">Choose a new password</a>. "
            "This link expires in 1 hour.</p>"
            "<p>If you didn't request this, you can ignore this email.</p>",
        )

    async def send_email_verification(self, email: str, name: str, token: str) -> None:
        verification_url = f"{self.frontend_url}/auth/verify-email?token={token}"
        await self._send(
            email,
            "Verify your email",
            f"<p>Hi {self._greeting(email, name)},</p>"
            f"<p><a href=\"{html.escape(verification_url)}\">Verify your email address</a>. "
            "This link expires in 24 hours.</p>",
        )

    async def send_login_code_email(self, email: str, name: str, code: str) -> None:
        await self._send(
            email,
            "Your sign-in code",
            f"<p>Hi {self._greeting(email, name)},</p>"
            f"<p>Your sign-in code is <strong>{html.escape(code)}</strong>. It expires in 10 minutes.</p>",
        )

    async def send_notification(
        self,
        email: str,
        name: str,
        title: str,
        message: str,
        action_text: Optional[str] = None,
        action_url: Optional[str] = None,
    ) -> None:
        body = (
            f"<p>Hi {self._greeting(email, name)},</p>"
            f"<h2>{html.escape(title)}</h2><p>{html.escape(message)}</p>"
        )
        if action_text and action_url:
            body += f"<p><a href=\"{html.escape(action_url)}\">{html.escape(action_text)}</a></p>"
        await self._send(email, title, body)
