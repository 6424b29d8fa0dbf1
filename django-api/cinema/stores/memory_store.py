"""In-process implementation of the CinemaStore.

Used by the service tests and for running the core without a database.
Each session has its own slot lock; writes made while slots are held are
staged and applied together under the data lock, so readers never see a
half-applied operation.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from cinema.domain import (
    Booking,
    BookingId,
    Hall,
    HallId,
    Session,
    SessionId,
    SessionSummary,
)
from cinema.stores.interfaces import CinemaStore, StoreConflictError

logger = logging.getLogger(__name__)


class InMemoryCinemaStore(CinemaStore):
    """Thread-safe dict-backed store."""

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._lock_timeout = lock_timeout
        self._data_lock = threading.RLock()
        self._halls: dict[HallId, Hall] = {}
        self._sessions: dict[SessionId, Session] = {}
        self._bookings: dict[BookingId, Booking] = {}
        self._slots: dict[SessionId, threading.Lock] = {}
        self._local = threading.local()

    def list_halls(self) -> list[Hall]:
        with self._data_lock:
            return sorted(self._halls.values(), key=lambda hall: hall.name)

    def get_hall(self, hall_id: HallId) -> Hall | None:
        with self._data_lock:
            return self._halls.get(hall_id)

    def list_session_summaries(self) -> list[SessionSummary]:
        with self._data_lock:
            summaries = [self._summarize(session) for session in self._sessions.values()]
        return sorted(summaries, key=lambda summary: summary.session.starts_at)

    def get_session_summary(self, session_id: SessionId) -> SessionSummary | None:
        with self._data_lock:
            session = self._sessions.get(session_id)
            return self._summarize(session) if session else None

    def get_session(self, session_id: SessionId) -> Session | None:
        with self._data_lock:
            return self._sessions.get(session_id)

    def list_bookings(self, session_id: SessionId) -> list[Booking]:
        with self._data_lock:
            return [b for b in self._bookings.values() if b.session_id == session_id]

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        with self._data_lock:
            return self._bookings.get(booking_id)

    def booked_tickets(
        self, session_id: SessionId, exclude: BookingId | None = None
    ) -> int:
        with self._data_lock:
            return sum(
                b.tickets.value
                for b in self._bookings.values()
                if b.session_id == session_id and b.id != exclude
            )

    def add_hall(self, hall: Hall) -> None:
        self._write(lambda: self._halls.__setitem__(hall.id, hall))

    def add_session(self, session: Session) -> None:
        self._write(lambda: self._sessions.__setitem__(session.id, session))

    def save_session(self, session: Session) -> None:
        self._write(lambda: self._sessions.__setitem__(session.id, session))

    def delete_session(self, session_id: SessionId) -> int:
        with self._data_lock:
            removed = [b.id for b in self._bookings.values() if b.session_id == session_id]

        def apply() -> None:
            self._sessions.pop(session_id, None)
            for booking_id in removed:
                self._bookings.pop(booking_id, None)

        self._write(apply)
        return len(removed)

    def add_booking(self, booking: Booking) -> None:
        self._write(lambda: self._bookings.__setitem__(booking.id, booking))

    def save_booking(self, booking: Booking) -> None:
        self._write(lambda: self._bookings.__setitem__(booking.id, booking))

    def delete_booking(self, booking_id: BookingId) -> None:
        self._write(lambda: self._bookings.pop(booking_id, None))

    @contextmanager
    def lock_sessions(self, *session_ids: SessionId) -> Iterator[None]:
        if getattr(self._local, "pending", None) is not None:
            raise RuntimeError("lock_sessions blocks cannot be nested")

        held = self._acquire(sorted(set(session_ids)))
        self._local.pending = []
        try:
            yield
            with self._data_lock:
                for apply in self._local.pending:
                    apply()
        finally:
            self._local.pending = None
            self._drop_slots(session_ids)
            for slot in reversed(held):
                slot.release()

    def _acquire(self, session_ids: list[SessionId]) -> list[threading.Lock]:
        held: list[threading.Lock] = []
        for session_id in session_ids:
            slot = self._slot(session_id)
            if not slot.acquire(timeout=self._lock_timeout):
                for taken in reversed(held):
                    taken.release()
                logger.warning("Timed out waiting for session %s", session_id)
                raise StoreConflictError(f"session {session_id} is busy")
            held.append(slot)
        return held

    def _slot(self, session_id: SessionId) -> threading.Lock:
        with self._data_lock:
            return self._slots.setdefault(session_id, threading.Lock())

    def _drop_slots(self, session_ids: tuple[SessionId, ...]) -> None:
        # Slots of missing or deleted sessions are not kept.
        with self._data_lock:
            for session_id in session_ids:
                if session_id not in self._sessions:
                    self._slots.pop(session_id, None)

    def _write(self, apply: Callable[[], object]) -> None:
        pending = getattr(self._local, "pending", None)
        if pending is not None:
            pending.append(apply)
            return
        with self._data_lock:
            apply()

    def _summarize(self, session: Session) -> SessionSummary:
        tickets = [
            b.tickets.value for b in self._bookings.values() if b.session_id == session.id
        ]
        return SessionSummary(
            session=session,
            hall=self._halls[session.hall_id],
            bookings_count=len(tickets),
            booked_tickets=sum(tickets),
        )
