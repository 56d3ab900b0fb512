"""Notification dispatching: direct emails and booking confirmations."""
from __future__ import annotations

import logging
import re
from datetime import datetime
from decimal import Decimal

from jinja2 import Environment

from app.models.database_models import Role
from app.models.schemas import MailResult, SendEmailRequest, SessionView
from app.services.mailer_service import MailerService, OutboundEmail
from app.services.sessions_service import SessionsService


logger = logging.getLogger(__name__)

BOOKING_CONFIRMATION_SUBJECT = "Booking Confirmation - Tennis Coaching Session"

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Names are interpolated verbatim; the body is not escaped.
_env = Environment(autoescape=False)

BOOKING_CONFIRMATION_TEMPLATE = _env.from_string(
    """
      <h2>Booking Confirmed!</h2>
      <p>Dear {{ user_name }},</p>
      <p>Your tennis coaching session has been confirmed:</p>
      <ul>
        <li><strong>Coach:</strong> {{ coach_name }}</li>
        <li><strong>Type:</strong> {{ booking_type }}</li>
        <li><strong>Date & Time:</strong> {{ scheduled_at }}</li>
        <li><strong>Duration:</strong> {{ duration_min }} minutes</li>
        <li><strong>Price:</strong> {{ price }}</li>
      </ul>
      <p>See you on the court!</p>
    """
)


class SessionAccessError(Exception):
    """Raised when the caller cannot resolve the requested session."""


def format_session_time(value: datetime) -> str:
    """Render as ``M/D/YYYY, H:MM:SS AM`` (en-US, no zero padding on month, day or hour)."""
    clock = value.strftime("%I:%M:%S %p").lstrip("0")
    return f"{value.month}/{value.day}/{value.year}, {clock}"


def format_price(value: Decimal) -> str:
    """Drop trailing zeros so ``Decimal("100.00")`` renders as ``100``."""
    return f"{value.normalize():f}"


def html_to_text(html: str) -> str:
    """Strip every ``<...>`` sequence; whitespace is left untouched."""
    return _TAG_PATTERN.sub("", html)


def render_booking_confirmation(session: SessionView) -> str:
    """Render the confirmation HTML body for a session."""
    return BOOKING_CONFIRMATION_TEMPLATE.render(
        user_name=session.user.name,
        coach_name=session.coach.name,
        booking_type=session.booking_type.name,
        scheduled_at=format_session_time(session.date_time),
        duration_min=session.duration_min,
        price=format_price(session.price),
    )


class NotificationService:
    """Compose notification emails and hand them to the mail transport."""

    def __init__(self, mailer: MailerService, sessions: SessionsService) -> None:
        self.mailer = mailer
        self.sessions = sessions

    def send_email(self, email: SendEmailRequest, caller_id: str, caller_role: Role) -> MailResult:
        """Send an arbitrary email; delivery failure is reported in the result."""

        logger.info("Account %s (%s) sending email to %s", caller_id, caller_role.value, email.to)
        return self.mailer.send_mail(
            OutboundEmail(
                to=email.to,
                subject=email.subject,
                html=email.html,
                text=email.text,
            )
        )

    def send_booking_confirmation(self, session_id: str, caller_id: str, caller_role: Role) -> None:
        """
        Email the session's user a booking confirmation.

        Args:
            session_id: Session to confirm
            caller_id: Account id of the authenticated caller
            caller_role: Role of the authenticated caller

        Raises:
            SessionAccessError: Session missing or caller is not a participant
            ValueError: The session's user has no email address
        """
        session = self.sessions.find_one(session_id, caller_id, caller_role)

        if not session:
            raise SessionAccessError("you must create session first")

        if not session.user.email:
            raise ValueError(f"Session {session.id} has no user email to send a confirmation to")

        html = render_booking_confirmation(session)

        result = self.mailer.send_mail(
            OutboundEmail(
                to=session.user.email,
                subject=BOOKING_CONFIRMATION_SUBJECT,
                html=html,
                text=html_to_text(html),
            )
        )
        # The outcome is not surfaced to the HTTP caller.
        if not result.success:
            logger.warning("Booking confirmation for session %s not delivered: %s", session_id, result.errors)
