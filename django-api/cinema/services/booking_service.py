"""Booking service - all booking business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate input before touching storage
- Run every capacity check and its write inside one store lock scope
- Return domain models or raise domain errors
"""

import logging
from dataclasses import replace

from cinema.domain import Booking, BookingId, SessionId
from cinema.domain.errors import (
    BookingNotFoundError,
    CapacityExceededError,
    InvalidTargetError,
    SessionNotFoundError,
)
from cinema.domain.ledger import ensure_admitted
from cinema.domain.models import SessionSummary
from cinema.services.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from cinema.services.validation import (
    parse_booking_id,
    parse_full_name,
    parse_session_id,
    parse_tickets,
)
from cinema.stores.interfaces import CinemaStore, StoreConflictError

logger = logging.getLogger(__name__)


class BookingService:
    """Service for creating, editing, deleting and moving bookings."""

    def __init__(
        self,
        store: CinemaStore,
        *,
        max_attempts: int = DEFAULT_ATTEMPTS,
        require_same_movie: bool = True,
    ) -> None:
        self._store = store
        self._max_attempts = max_attempts
        self._require_same_movie = require_same_movie

    def list_bookings(self, session_id: str) -> list[Booking]:
        """Return bookings of a session.

        Raises:
            InvalidInputError: If the session_id is not a valid UUID.
            SessionNotFoundError: If the session does not exist.
        """
        sid = parse_session_id(session_id)
        if self._store.get_session(sid) is None:
            raise SessionNotFoundError(session_id)
        return self._store.list_bookings(sid)

    def create_booking(self, session_id: str, full_name: str, tickets: int) -> Booking:
        """Book ``tickets`` seats on a session.

        Raises:
            InvalidInputError: Malformed id, name or ticket count.
            SessionNotFoundError: If the session does not exist.
            CapacityExceededError: If the hall cannot hold the extra tickets.
            ConflictError: If concurrent writers kept colliding.
        """
        sid = parse_session_id(session_id)
        booking = Booking(
            id=BookingId.new(),
            session_id=sid,
            full_name=parse_full_name(full_name),
            tickets=parse_tickets(tickets),
        )

        def create() -> Booking:
            self._summary(sid)
            with self._store.lock_sessions(sid):
                summary = self._summary(sid)
                self._admit(summary, summary.booked_tickets, booking.tickets.value)
                self._store.add_booking(booking)
            return booking

        created = retry_on_conflict(create, attempts=self._max_attempts, name="create_booking")
        logger.info(
            "Booking %s created on session %s (%d tickets)",
            created.id, sid, created.tickets.value,
        )
        return created

    def update_booking(self, booking_id: str, full_name: str, tickets: int) -> Booking:
        """Replace the holder name and ticket count of a booking.

        The new count is checked against the tickets held by the other
        bookings of the session, so a rejection reports the seats this
        booking could hold as ``remaining``.

        Raises:
            InvalidInputError: Malformed id, name or ticket count.
            BookingNotFoundError: If the booking does not exist.
            CapacityExceededError: If the new count does not fit.
            ConflictError: If concurrent writers kept colliding.
        """
        bid = parse_booking_id(booking_id)
        name = parse_full_name(full_name)
        count = parse_tickets(tickets)

        def update() -> Booking:
            current = self._booking(bid)
            with self._store.lock_sessions(current.session_id):
                locked = self._relock(bid, current.session_id)
                summary = self._summary(locked.session_id)
                others = self._store.booked_tickets(locked.session_id, exclude=bid)
                self._admit(summary, others, count.value)
                updated = replace(locked, full_name=name, tickets=count)
                self._store.save_booking(updated)
            return updated

        updated = retry_on_conflict(update, attempts=self._max_attempts, name="update_booking")
        logger.info("Booking %s updated (%d tickets)", bid, updated.tickets.value)
        return updated

    def delete_booking(self, booking_id: str) -> None:
        """Delete a booking, releasing its tickets.

        Raises:
            InvalidInputError: If the booking_id is not a valid UUID.
            BookingNotFoundError: If the booking does not exist.
        """
        bid = parse_booking_id(booking_id)

        def delete() -> None:
            current = self._booking(bid)
            with self._store.lock_sessions(current.session_id):
                self._relock(bid, current.session_id)
                self._store.delete_booking(bid)

        retry_on_conflict(delete, attempts=self._max_attempts, name="delete_booking")
        logger.info("Booking %s deleted", bid)

    def move_booking(self, booking_id: str, target_session_id: str) -> Booking:
        """Move a booking to another session as a single unit.

        Both sessions are locked for the duration of the check and the
        write, so the booking is always counted in exactly one of them.

        Raises:
            InvalidInputError: Malformed booking or session id.
            BookingNotFoundError: If the booking does not exist.
            SessionNotFoundError: If the target session does not exist.
            InvalidTargetError: Same session as now, or a different movie
                while the same-movie rule is enabled.
            CapacityExceededError: If the target cannot hold the tickets.
            ConflictError: If concurrent writers kept colliding.
        """
        bid = parse_booking_id(booking_id)
        target_id = parse_session_id(target_session_id)

        def move() -> Booking:
            current = self._booking(bid)
            if current.session_id == target_id:
                raise InvalidTargetError("Booking is already in this session")
            self._summary(target_id)

            with self._store.lock_sessions(current.session_id, target_id):
                locked = self._relock(bid, current.session_id)
                source = self._summary(locked.session_id)
                target = self._summary(target_id)
                if (
                    self._require_same_movie
                    and target.session.movie_title != source.session.movie_title
                ):
                    raise InvalidTargetError("Target session shows a different movie")
                self._admit(target, target.booked_tickets, locked.tickets.value)
                moved = replace(locked, session_id=target_id)
                self._store.save_booking(moved)
            return moved

        moved = retry_on_conflict(move, attempts=self._max_attempts, name="move_booking")
        logger.info("Booking %s moved to session %s", bid, target_id)
        return moved

    def _booking(self, booking_id: BookingId) -> Booking:
        booking = self._store.get_booking(booking_id)
        if booking is None:
            raise BookingNotFoundError(str(booking_id))
        return booking

    def _relock(self, booking_id: BookingId, expected_session: SessionId) -> Booking:
        """Re-read a booking once its session is locked."""
        booking = self._booking(booking_id)
        if booking.session_id != expected_session:
            raise StoreConflictError(f"booking {booking_id} changed session while locking")
        return booking

    def _summary(self, session_id: SessionId) -> SessionSummary:
        summary = self._store.get_session_summary(session_id)
        if summary is None:
            raise SessionNotFoundError(str(session_id))
        return summary

    def _admit(self, summary: SessionSummary, existing: int, delta: int) -> int:
        try:
            return ensure_admitted(summary.session.id, summary.hall.capacity, existing, delta)
        except CapacityExceededError as exc:
            logger.warning(
                "Rejected %+d tickets on session %s: %d remaining",
                delta, summary.session.id, exc.remaining,
            )
            raise
