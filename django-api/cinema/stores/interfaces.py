"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from cinema.domain import (
    Booking,
    BookingId,
    Hall,
    HallId,
    Session,
    SessionId,
    SessionSummary,
)


class StoreConflictError(Exception):
    """Transient failure: lock contention or a concurrent write won.

    Services retry the whole operation when they see this.
    """


class CinemaStore(ABC):
    """Interface for hall, session and booking persistence."""

    # Reads

    @abstractmethod
    def list_halls(self) -> list[Hall]:
        """Return all halls ordered by name."""
        ...

    @abstractmethod
    def get_hall(self, hall_id: HallId) -> Hall | None:
        """Return a hall by ID, or None if not found."""
        ...

    @abstractmethod
    def list_session_summaries(self) -> list[SessionSummary]:
        """Return all sessions with hall and aggregates, by starts_at ascending."""
        ...

    @abstractmethod
    def get_session_summary(self, session_id: SessionId) -> SessionSummary | None:
        """Return one session with hall and aggregates, or None."""
        ...

    @abstractmethod
    def get_session(self, session_id: SessionId) -> Session | None:
        """Return a session by ID, or None if not found."""
        ...

    @abstractmethod
    def list_bookings(self, session_id: SessionId) -> list[Booking]:
        """Return bookings of a session in creation order."""
        ...

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        """Return a booking by ID, or None if not found."""
        ...

    @abstractmethod
    def booked_tickets(
        self, session_id: SessionId, exclude: BookingId | None = None
    ) -> int:
        """Return the committed ticket sum of a session.

        ``exclude`` leaves one booking's tickets out of the sum.
        """
        ...

    # Writes

    @abstractmethod
    def add_hall(self, hall: Hall) -> None:
        ...

    @abstractmethod
    def add_session(self, session: Session) -> None:
        ...

    @abstractmethod
    def save_session(self, session: Session) -> None:
        ...

    @abstractmethod
    def delete_session(self, session_id: SessionId) -> int:
        """Delete a session and all of its bookings.

        Returns the number of bookings removed with it.
        """
        ...

    @abstractmethod
    def add_booking(self, booking: Booking) -> None:
        ...

    @abstractmethod
    def save_booking(self, booking: Booking) -> None:
        ...

    @abstractmethod
    def delete_booking(self, booking_id: BookingId) -> None:
        ...

    # Transactions

    @abstractmethod
    def lock_sessions(self, *session_ids: SessionId) -> AbstractContextManager[None]:
        """Open a transaction holding exclusive slots on the given sessions.

        Slots are taken in ascending id order. Writes made inside the block
        become visible together when it exits normally and are discarded if
        it raises. Raises StoreConflictError when the slots cannot be taken.
        """
        ...
