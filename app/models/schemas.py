"""Pydantic models describing API payloads and read-only views."""
from datetime import datetime
from decimal import Decimal

from email_validator import validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.database_models import Role


# Session views
class ParticipantView(BaseModel):
    """Participant of a session as seen by the notification flow."""

    id: str
    name: str
    email: str | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)


class BookingTypeView(BaseModel):
    name: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class SessionView(BaseModel):
    """Read-only snapshot of a booked session."""

    id: str
    date_time: datetime
    duration_min: int
    price: Decimal
    user: ParticipantView
    coach: ParticipantView
    booking_type: BookingTypeView

    model_config = ConfigDict(from_attributes=True, frozen=True)


# Notification schemas
class SendEmailRequest(BaseModel):
    """Schema for the generic send-email endpoint."""

    to: str
    subject: str = Field(min_length=1)
    text: str | None = None
    html: str | None = None

    @field_validator("to")
    @classmethod
    def validate_recipient(cls, value: str) -> str:
        """Reject malformed addresses but keep the caller's spelling of the address."""

        validate_email(value, check_deliverability=False)
        return value


class SendBookingConfirmationRequest(BaseModel):
    """Schema for requesting a booking confirmation email."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)


class MailResult(BaseModel):
    """Normalized outcome of an email send attempt."""

    success: bool
    message_ids: list[str] | None = None
    errors: list[str] | None = None


class MessageResponse(BaseModel):
    message: str


# Auth
class CurrentUser(BaseModel):
    """Principal resolved from a bearer token."""

    sub: str
    email: str
    role: Role
