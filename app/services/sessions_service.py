"""Read access to booked sessions, restricted to the session's participants."""
import logging

from sqlalchemy.orm import Session, joinedload

from app.models.database_models import CoachingSession, Role
from app.models.schemas import SessionView


logger = logging.getLogger(__name__)


class SessionsService:
    """Look up sessions on behalf of an authenticated caller."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_one(self, session_id: str, caller_id: str, caller_role: Role) -> SessionView | None:
        """
        Fetch a session the caller participates in.

        Callers with the USER role must be the session's user; every other
        role must be the session's coach.

        Returns:
            SessionView for participants, None when the session does not exist
            or the caller is not a participant.
        """
        session = (
            self.db.query(CoachingSession)
            .options(
                joinedload(CoachingSession.user),
                joinedload(CoachingSession.coach),
                joinedload(CoachingSession.booking_type),
            )
            .filter(CoachingSession.id == session_id)
            .first()
        )

        if session is None:
            logger.info("Session %s not found", session_id)
            return None

        if caller_role == Role.USER:
            is_participant = session.user_id == caller_id
        else:
            is_participant = session.coach_id == caller_id

        if not is_participant:
            logger.info("Account %s (%s) is not a participant of session %s", caller_id, caller_role.value, session_id)
            return None

        return SessionView.model_validate(session)
