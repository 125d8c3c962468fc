"""
SMTP Email Sender - delivers HTML mail through the configured SMTP relay.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.app.services.email_sender import EmailDeliveryError, IEmailSender
from src.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 30


class SmtpEmailSender(IEmailSender):
    def __init__(self, config):
        self.host = config.EMAIL_HOST
        self.port = int(config.EMAIL_PORT or 587)
        self.user = config.EMAIL_USER
        self.password = config.EMAIL_PASS
        self.from_name = config.EMAIL_FROM

    def is_configured(self) -> bool:
        return bool(self.host and self.user and self.password)

    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        if not self.is_configured():
            raise ConfigurationError(
                "Email configuration is missing. Set EMAIL_HOST, EMAIL_USER and EMAIL_PASS."
            )
        await asyncio.to_thread(self._send, recipient, subject, html_body)

    def _send(self, recipient: str, subject: str, html_body: str) -> None:
        msg = MIMEMultipart("alternative")
        msg["From"] = f"{self.from_name} <{self.user}>" if self.from_name else self.user
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        try:
            if self.port == 465:
                with smtplib.SMTP_SSL(self.host, self.port, timeout=SMTP_TIMEOUT_SECONDS) as server:
                    server.login(self.user, self.password)
                    server.send_message(msg)
            else:
                with smtplib.SMTP(self.host, self.port, timeout=SMTP_TIMEOUT_SECONDS) as server:
                    server.starttls()
                    server.login(self.user, self.password)
                    server.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"Failed to send email to {recipient}: {exc}")
            raise EmailDeliveryError(str(exc)) from exc

        logger.info(f"Email sent to {recipient}: {subject}")
