"""Session and hall service.

Halls are read-only here; sessions are created, replaced and deleted.
Deleting a session removes its bookings in the same transaction.
"""

import logging
from datetime import datetime

from cinema.domain import Hall, Session, SessionId, SessionSummary
from cinema.domain.errors import (
    CapacityExceededError,
    HallNotFoundError,
    SessionNotFoundError,
)
from cinema.domain.ledger import ensure_admitted
from cinema.services.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from cinema.services.validation import (
    parse_hall_id,
    parse_movie_title,
    parse_schedule,
    parse_session_id,
)
from cinema.stores.interfaces import CinemaStore

logger = logging.getLogger(__name__)


class SessionService:
    """Service for hall listing and session scheduling."""

    def __init__(self, store: CinemaStore, *, max_attempts: int = DEFAULT_ATTEMPTS) -> None:
        self._store = store
        self._max_attempts = max_attempts

    def list_halls(self) -> list[Hall]:
        """Return all halls ordered by name."""
        return self._store.list_halls()

    def list_sessions(self) -> list[SessionSummary]:
        """Return all sessions with booking aggregates, earliest first."""
        return self._store.list_session_summaries()

    def get_session(self, session_id: str) -> SessionSummary:
        """Return a session with its aggregates.

        Raises:
            InvalidInputError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        summary = self._store.get_session_summary(parse_session_id(session_id))
        if summary is None:
            raise SessionNotFoundError(session_id)
        return summary

    def create_session(
        self,
        movie_title: str,
        hall_id: str,
        starts_at: datetime,
        duration_minutes: int,
    ) -> SessionSummary:
        """Schedule a new session.

        Raises:
            InvalidInputError: Empty title, bad hall id, naive start time or
                a duration that is non-positive, longer than a day or ends
                past the supported date range.
            HallNotFoundError: If the hall does not exist.
        """
        start, duration = parse_schedule(starts_at, duration_minutes)
        session = Session(
            id=SessionId.new(),
            movie_title=parse_movie_title(movie_title),
            hall_id=parse_hall_id(hall_id),
            starts_at=start,
            duration_minutes=duration,
        )

        def create() -> SessionSummary:
            hall = self._hall(session.hall_id)
            with self._store.lock_sessions(session.id):
                self._store.add_session(session)
            return SessionSummary(session=session, hall=hall)

        created = retry_on_conflict(create, attempts=self._max_attempts, name="create_session")
        logger.info("Session %s created in hall %s", session.id, session.hall_id)
        return created

    def update_session(
        self,
        session_id: str,
        movie_title: str,
        hall_id: str,
        starts_at: datetime,
        duration_minutes: int,
    ) -> SessionSummary:
        """Replace the fields of a session.

        Tickets already booked must still fit the (possibly new) hall.

        Raises:
            InvalidInputError: Malformed fields.
            SessionNotFoundError: If the session does not exist.
            HallNotFoundError: If the hall does not exist.
            CapacityExceededError: If booked tickets exceed the hall capacity.
        """
        sid = parse_session_id(session_id)
        title = parse_movie_title(movie_title)
        hid = parse_hall_id(hall_id)
        start, duration = parse_schedule(starts_at, duration_minutes)

        def update() -> SessionSummary:
            if self._store.get_session(sid) is None:
                raise SessionNotFoundError(session_id)
            with self._store.lock_sessions(sid):
                current = self._store.get_session_summary(sid)
                if current is None:
                    raise SessionNotFoundError(session_id)
                hall = current.hall if current.hall.id == hid else self._hall(hid)
                try:
                    ensure_admitted(sid, hall.capacity, current.booked_tickets, 0)
                except CapacityExceededError:
                    logger.warning(
                        "Session %s cannot move to hall %s: %d tickets booked, capacity %d",
                        sid, hid, current.booked_tickets, hall.capacity.value,
                    )
                    raise
                updated = Session(
                    id=sid,
                    movie_title=title,
                    hall_id=hid,
                    starts_at=start,
                    duration_minutes=duration,
                )
                self._store.save_session(updated)
            return SessionSummary(
                session=updated,
                hall=hall,
                bookings_count=current.bookings_count,
                booked_tickets=current.booked_tickets,
            )

        updated = retry_on_conflict(update, attempts=self._max_attempts, name="update_session")
        logger.info("Session %s updated", sid)
        return updated

    def delete_session(self, session_id: str) -> None:
        """Delete a session together with all of its bookings.

        Raises:
            InvalidInputError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        sid = parse_session_id(session_id)

        def delete() -> int:
            if self._store.get_session(sid) is None:
                raise SessionNotFoundError(session_id)
            with self._store.lock_sessions(sid):
                if self._store.get_session(sid) is None:
                    raise SessionNotFoundError(session_id)
                return self._store.delete_session(sid)

        removed = retry_on_conflict(delete, attempts=self._max_attempts, name="delete_session")
        logger.info("Session %s deleted with %d bookings", sid, removed)

    def _hall(self, hall_id) -> Hall:
        hall = self._store.get_hall(hall_id)
        if hall is None:
            raise HallNotFoundError(str(hall_id))
        return hall
