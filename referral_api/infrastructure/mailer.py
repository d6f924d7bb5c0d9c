from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from ..core import Settings
from ..core.exceptions import DeliveryFailedError


logger = logging.getLogger(__name__)


class Mailer:
    """Thin async wrapper around a single outbound SMTP account."""

    def __init__(
        self,
        username: str,
        password: str,
        *,
        hostname: str = "smtp.gmail.com",
        port: int = 587,
        start_tls: bool = True,
    ) -> None:
        if not username or not password:
            raise RuntimeError("SMTP username and password are required for Mailer")

        self.username = username
        self._password = password
        self.hostname = hostname
        self.port = port
        self.start_tls = start_tls

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        return cls(
            settings.EMAIL_USER,
            settings.EMAIL_PASS,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
        )

    def build_message(self, to_address: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.username
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)
        return message

    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Hand one plain-text message to the SMTP server.

        A single attempt is made. Whatever the transport reports as an error
        is raised as ``DeliveryFailedError``; nothing is retried or queued.
        """
        message = self.build_message(to_address, subject, body)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                username=self.username,
                password=self._password,
                start_tls=self.start_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise DeliveryFailedError(str(exc)) from exc
        logger.debug("SMTP accepted message for %s", to_address)
