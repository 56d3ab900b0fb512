"""Notification API endpoints."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth import require_roles
from app.database import get_db
from app.models.database_models import Role
from app.models.schemas import (
    CurrentUser,
    MailResult,
    MessageResponse,
    SendBookingConfirmationRequest,
    SendEmailRequest,
)
from app.services.mailer_service import MailerService, get_mailer
from app.services.notification_service import NotificationService, SessionAccessError
from app.services.sessions_service import SessionsService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

Participant = Annotated[CurrentUser, Depends(require_roles(Role.USER, Role.COACH))]


def get_notification_service(
    db: Annotated[Session, Depends(get_db)],
    mailer: Annotated[MailerService, Depends(get_mailer)],
) -> NotificationService:
    """Wire the notification service for a single request."""
    return NotificationService(mailer=mailer, sessions=SessionsService(db))


@router.post(
    "/email",
    response_model=MailResult,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def send_email(
    email: SendEmailRequest,
    user: Participant,
    service: Annotated[NotificationService, Depends(get_notification_service)],
) -> MailResult:
    """
    Send an email on behalf of the caller.

    Delivery failure is reported in the body (``success: false``), the status
    code stays 201.
    """
    return service.send_email(email, user.sub, user.role)


@router.post(
    "/confirm",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def send_booking_confirmation(
    confirm: SendBookingConfirmationRequest,
    user: Participant,
    service: Annotated[NotificationService, Depends(get_notification_service)],
) -> MessageResponse:
    """
    Email a booking confirmation for one of the caller's sessions.

    Raises:
        HTTPException: 401 if the session does not exist or the caller is not
            one of its participants
    """
    try:
        service.send_booking_confirmation(confirm.session_id, user.sub, user.role)
    except SessionAccessError as err:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(err)) from err

    return MessageResponse(message="Booking confirmation sent successfully")
