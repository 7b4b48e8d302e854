from __future__ import annotations

import logging
import re
import smtplib
import ssl
import time
import uuid
from email.message import EmailMessage
from typing import Protocol

from ..core.exceptions import ConfigError, ExternalServiceError
from ..core.settings import MailSettings

logger = logging.getLogger(__name__)

# service -> (host, port, implicit TLS)
SMTP_HOSTS = {
    "gmail": ("smtp.gmail.com", 465, True),
    "outlook": ("smtp-mail.outlook.com", 587, False),
    "hotmail": ("smtp-mail.outlook.com", 587, False),
    "office365": ("smtp.office365.com", 587, False),
}


class Mailer(Protocol):
    def send(self, to: str, subject: str, html: str) -> None:
        raise NotImplementedError


class SmtpMailer(Mailer):
    """Outbound mail over SMTP; unknown services fall back to Office 365."""

    def __init__(self, settings: MailSettings, *, timeout: float = 15.0):
        if not settings.user or not settings.password:
            raise ConfigError("Email configuration missing (MAIL_USER or MAIL_PASSWORD).")
        self._settings = settings
        self._timeout = timeout
        self._host, self._port, self._implicit_tls = SMTP_HOSTS.get(settings.service, SMTP_HOSTS["office365"])

    def _build(self, to: str, subject: str, html: str) -> EmailMessage:
        domain = self._settings.user.split("@")[-1] or "localhost"
        msg = EmailMessage()
        msg["From"] = self._settings.user
        msg["To"] = to
        msg["Reply-To"] = self._settings.user
        msg["Subject"] = subject
        msg["Message-ID"] = f"<{int(time.time() * 1000)}.{uuid.uuid4().hex[:10]}@{domain}>"
        msg.set_content(re.sub(r"<[^>]*>", "", html))
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, to: str, subject: str, html: str) -> None:
        msg = self._build(to, subject, html)
        context = ssl.create_default_context()
        try:
            if self._implicit_tls:
                with smtplib.SMTP_SSL(self._host, self._port, timeout=self._timeout, context=context) as smtp:
                    smtp.login(self._settings.user, self._settings.password)
                    smtp.send_message(msg)
            else:
                with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                    smtp.starttls(context=context)
                    smtp.login(self._settings.user, self._settings.password)
                    smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s via %s failed: %s", to, self._host, e)
            raise ExternalServiceError("Failed to send email") from e
        logger.info("Email sent to %s", to)
