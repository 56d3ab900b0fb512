"""Integration tests for notification API endpoints."""
from __future__ import annotations

from fastapi.testclient import TestClient

from app.models.database_models import Role
from app.models.schemas import MailResult


EMAIL_PAYLOAD = {
    "to": "recipient@example.com",
    "subject": "Practice reminder",
    "text": "Bring your racket",
}


# ============================================================================
# POST /api/notifications/email
# ============================================================================

def test_send_email_success(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/email",
        json=EMAIL_PAYLOAD,
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 201
    assert response.json() == {"success": True, "message_ids": ["msg-123"]}
    assert len(mailer.sent) == 1
    message = mailer.sent[0]
    assert message.to == "recipient@example.com"
    assert message.subject == "Practice reminder"
    assert message.text == "Bring your racket"
    assert message.html is None


def test_send_email_as_coach(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/email",
        json=EMAIL_PAYLOAD,
        headers=auth_headers(booked_session.coach),
    )

    assert response.status_code == 201
    assert len(mailer.sent) == 1


def test_send_email_unauthenticated(test_client: TestClient, mailer):
    response = test_client.post("/api/notifications/email", json=EMAIL_PAYLOAD)

    assert response.status_code == 401
    assert mailer.sent == []


def test_send_email_invalid_token(test_client: TestClient, mailer):
    response = test_client.post(
        "/api/notifications/email",
        json=EMAIL_PAYLOAD,
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    assert mailer.sent == []


def test_send_email_delivery_failure_reported_in_body(
    test_client: TestClient, mailer, booked_session, auth_headers
):
    mailer.result = MailResult(success=False, errors=["SMTP connection failed"])

    response = test_client.post(
        "/api/notifications/email",
        json=EMAIL_PAYLOAD,
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 201
    assert response.json() == {"success": False, "errors": ["SMTP connection failed"]}


def test_send_email_invalid_address(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/email",
        json={**EMAIL_PAYLOAD, "to": "not-an-email"},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 400
    assert "detail" in response.json()
    assert mailer.sent == []


def test_send_email_recipient_passed_through_unchanged(
    test_client: TestClient, mailer, booked_session, auth_headers
):
    response = test_client.post(
        "/api/notifications/email",
        json={**EMAIL_PAYLOAD, "to": "John.Doe@EXAMPLE.COM"},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 201
    assert mailer.sent[0].to == "John.Doe@EXAMPLE.COM"


def test_send_email_missing_subject(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/email",
        json={"to": "recipient@example.com", "text": "Hi"},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 400
    assert mailer.sent == []


def test_send_email_admin_forbidden(test_client: TestClient, mailer, make_account, auth_headers):
    admin = make_account("admin@example.com", "Admin", Role.ADMIN)

    response = test_client.post(
        "/api/notifications/email",
        json=EMAIL_PAYLOAD,
        headers=auth_headers(admin),
    )

    assert response.status_code == 403
    assert mailer.sent == []


# ============================================================================
# POST /api/notifications/confirm
# ============================================================================

def test_confirm_booking_sends_to_user(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": booked_session.session_id},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 201
    assert response.json() == {"message": "Booking confirmation sent successfully"}
    assert len(mailer.sent) == 1
    message = mailer.sent[0]
    assert message.to == "john@example.com"
    assert message.subject == "Booking Confirmation - Tennis Coaching Session"
    for expected in ("John Doe", "Coach Smith", "60 minutes", "100"):
        assert expected in message.html
    assert "<strong>Price:</strong> 100</li>" in message.html
    assert "1/15/2026, 10:00:00 AM" in message.html


def test_confirm_booking_by_coach(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": booked_session.session_id},
        headers=auth_headers(booked_session.coach),
    )

    assert response.status_code == 201
    assert [m.to for m in mailer.sent] == ["john@example.com"]


def test_confirm_booking_other_pair_unauthorized(
    test_client: TestClient, mailer, booked_session, make_account, book_session, auth_headers
):
    other_user = make_account("jane@example.com", "Jane Roe", Role.USER)
    other_coach = make_account("jones@example.com", "Coach Jones", Role.COACH)
    book_session(other_user, other_coach)

    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": booked_session.session_id},
        headers=auth_headers(other_user),
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "you must create session first"
    assert mailer.sent == []


def test_confirm_booking_unknown_session(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": "does-not-exist"},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 401
    assert mailer.sent == []


def test_confirm_booking_delivery_failure_not_reported(
    test_client: TestClient, mailer, booked_session, auth_headers
):
    mailer.result = MailResult(success=False, errors=["SMTP connection failed"])

    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": booked_session.session_id},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 201
    assert len(mailer.sent) == 1


def test_confirm_booking_missing_session_id(test_client: TestClient, mailer, booked_session, auth_headers):
    response = test_client.post(
        "/api/notifications/confirm",
        json={},
        headers=auth_headers(booked_session.user),
    )

    assert response.status_code == 400
    assert mailer.sent == []


def test_confirm_booking_unauthenticated(test_client: TestClient, mailer, booked_session):
    response = test_client.post(
        "/api/notifications/confirm",
        json={"sessionId": booked_session.session_id},
    )

    assert response.status_code == 401
    assert mailer.sent == []
