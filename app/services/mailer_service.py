"""Transactional email transport backed by the Resend API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Protocol

import resend

from app.config import get_settings
from app.models.schemas import MailResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundEmail:
    """A single message handed to the transport. Built per call, never stored."""

    to: str
    subject: str
    html: str | None = None
    text: str | None = None


class EmailClient(Protocol):
    """Subset of the provider client the transport relies on."""

    def send(self, params: dict[str, Any]) -> Any: ...


class MailerService:
    """Thin wrapper around the provider client that never raises on delivery failure."""

    def __init__(
        self,
        api_token: str | None,
        sender_email: str | None,
        sender_name: str = "Tennis Coaching",
        client: EmailClient | None = None,
    ) -> None:
        if not api_token or not sender_email:
            raise ValueError("MAIL_API_TOKEN and MAIL_SENDER_EMAIL must be provided")

        resend.api_key = api_token
        self._client = client if client is not None else resend.Emails
        self.sender_email = sender_email
        self.sender_name = sender_name

    @property
    def sender(self) -> str:
        return f"{self.sender_name} <{self.sender_email}>"

    def _build_params(self, message: OutboundEmail) -> dict[str, Any]:
        params: dict[str, Any] = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
        }
        if message.html is not None:
            params["html"] = message.html
        if message.text is not None:
            params["text"] = message.text
        return params

    def send_mail(self, message: OutboundEmail) -> MailResult:
        """
        Send a message and normalize the provider outcome.

        Args:
            message: Recipient, subject and optional html/text bodies

        Returns:
            MailResult: ``success=True`` with the provider message id, or
            ``success=False`` with the error messages. Transport exceptions are
            converted rather than raised.
        """
        try:
            response = self._client.send(self._build_params(message))
        except Exception as err:
            logger.warning("Email to %s failed: %s", message.to, err, exc_info=True)
            return MailResult(success=False, errors=[str(err) or "Email sending failed"])

        if isinstance(response, dict):
            message_id = response.get("id")
        else:
            message_id = getattr(response, "id", None)

        if not message_id:
            logger.warning("Email provider returned no message id for %s: %r", message.to, response)
            return MailResult(success=False, errors=["Unknown email sending error"])

        logger.info("Email sent to %s (subject=%r, id=%s)", message.to, message.subject, message_id)
        return MailResult(success=True, message_ids=[str(message_id)])


@lru_cache()
def get_mailer() -> MailerService:
    """Return the process-wide mailer built from settings."""

    settings = get_settings()
    return MailerService(
        api_token=settings.mail_api_token,
        sender_email=settings.mail_sender_email,
        sender_name=settings.mail_sender_name,
    )
