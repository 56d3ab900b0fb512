"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

_TEST_DIR = Path(tempfile.mkdtemp(prefix="tennis-coaching-tests-"))

os.environ["JWT_SECRET"] = os.environ.get("JWT_SECRET") or "test-jwt-secret-key-with-enough-length"
os.environ["MAIL_API_TOKEN"] = os.environ.get("MAIL_API_TOKEN") or "test-mail-token"
os.environ["MAIL_SENDER_EMAIL"] = os.environ.get("MAIL_SENDER_EMAIL") or "noreply@example.com"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR / 'test.db'}"
os.environ["LOG_DIR"] = str(_TEST_DIR / "logs")

from app.logging_config import configure_logging

configure_logging()

from app.auth import create_access_token
from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.database_models import Account, BookingType, CoachingSession, Role
from app.models.schemas import MailResult
from app.services.mailer_service import OutboundEmail, get_mailer

Base.metadata.create_all(engine)


class RecordingMailer:
    """Stand-in for the mail transport that records every message."""

    def __init__(self) -> None:
        self.sent: list[OutboundEmail] = []
        self.result = MailResult(success=True, message_ids=["msg-123"])

    def send_mail(self, message: OutboundEmail) -> MailResult:
        self.sent.append(message)
        return self.result


@dataclass
class BookedSession:
    session_id: str
    user: Account
    coach: Account


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture
def mailer() -> Iterator[RecordingMailer]:
    """Replace the process-wide mailer for the duration of a test."""

    fake = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_mailer, None)


@pytest.fixture
def db():
    """Database session; all rows are removed after each test."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture
def make_account(db) -> Callable[..., Account]:
    """Factory persisting an account."""

    def _make(email: str, name: str, role: Role, is_active: bool = True) -> Account:
        account = Account(email=email, name=name, role=role, is_active=is_active)
        db.add(account)
        db.commit()
        db.refresh(account)
        return account

    return _make


@pytest.fixture
def book_session(db) -> Callable[..., str]:
    """Factory persisting a booking type plus a session; returns the session id."""

    def _book(user: Account, coach: Account, *, duration_min: int = 60, price: str = "100") -> str:
        booking_type = BookingType(name="Private Lesson", base_price=Decimal(price), coach_id=coach.id)
        db.add(booking_type)
        db.flush()
        session = CoachingSession(
            date_time=datetime(2026, 1, 15, 10, 0),
            duration_min=duration_min,
            price=Decimal(price),
            user_id=user.id,
            coach_id=coach.id,
            booking_type_id=booking_type.id,
        )
        db.add(session)
        db.commit()
        return session.id

    return _book


@pytest.fixture(scope="session")
def auth_headers() -> Callable[[Account], dict[str, str]]:
    """Build an Authorization header for an account."""

    def _headers(account: Account) -> dict[str, str]:
        token = create_access_token(account.id, account.email, account.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def booked_session(make_account, book_session) -> BookedSession:
    """John Doe's 60-minute session with Coach Smith priced at 100."""

    user = make_account("john@example.com", "John Doe", Role.USER)
    coach = make_account("smith@example.com", "Coach Smith", Role.COACH)
    return BookedSession(session_id=book_session(user, coach), user=user, coach=coach)
