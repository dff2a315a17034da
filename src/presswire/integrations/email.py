"""Newsletter email provider adapters.

Two real providers (Resend, SendGrid) and a ``none`` mode that reports
every recipient as delivered without calling out.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from presswire.content.models import EmailProviderName, NewsletterSettings
from presswire.integrations.http import post_json

logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"
SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"


class EmailMessage(BaseModel):
    """A single outbound newsletter email."""

    to: str
    subject: str
    html: str
    from_email: str
    from_name: str
    reply_to: str | None = None

    @property
    def sender(self) -> str:
        return f"{self.from_name} <{self.from_email}>"


class EmailProvider(ABC):
    """Base class for newsletter delivery."""

    name: EmailProviderName

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """Send one email; True only when the provider confirmed delivery.

        May raise on network failure; the caller isolates per-recipient errors.
        """


class ResendProvider(EmailProvider):
    name = EmailProviderName.RESEND

    def __init__(self, api_key: str, timeout: float = 10) -> None:
        self._api_key = api_key
        self._timeout = timeout

    def send(self, message: EmailMessage) -> bool:
        payload: dict = {
            "from": message.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        if message.reply_to:
            payload["reply_to"] = message.reply_to
        resp = post_json(
            RESEND_URL,
            payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
        )
        return resp.ok


class SendGridProvider(EmailProvider):
    name = EmailProviderName.SENDGRID

    def __init__(self, api_key: str, timeout: float = 10) -> None:
        self._api_key = api_key
        self._timeout = timeout

    def send(self, message: EmailMessage) -> bool:
        payload = {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": message.from_email, "name": message.from_name},
            "subject": message.subject,
            "content": [{"type": "text/html", "value": message.html}],
        }
        resp = post_json(
            SENDGRID_URL,
            payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
        )
        return resp.ok


class SimulatedProvider(EmailProvider):
    """Reports every send as delivered without any network call."""

    name = EmailProviderName.NONE

    def send(self, message: EmailMessage) -> bool:
        logger.debug("Simulated newsletter delivery to %s", message.to)
        return True


def create_email_provider(settings: NewsletterSettings, timeout: float = 10) -> EmailProvider:
    """Pick the delivery adapter for a brand's settings.

    A real provider without an API key falls back to simulated delivery.
    """
    if settings.api_key:
        if settings.provider == EmailProviderName.RESEND:
            return ResendProvider(settings.api_key, timeout=timeout)
        if settings.provider == EmailProviderName.SENDGRID:
            return SendGridProvider(settings.api_key, timeout=timeout)
    elif settings.provider != EmailProviderName.NONE:
        logger.info(
            "No API key for %s newsletter provider %s, simulating delivery",
            settings.brand,
            settings.provider,
        )
    return SimulatedProvider()
