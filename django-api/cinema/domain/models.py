"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in cinema/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from cinema.domain.value_objects import (
    BookingId,
    Capacity,
    DurationMinutes,
    FullName,
    HallId,
    MovieTitle,
    SessionId,
    TicketCount,
)


@dataclass(frozen=True)
class Hall:
    """Domain representation of a Hall."""

    id: HallId
    name: str
    capacity: Capacity


@dataclass(frozen=True)
class Session:
    """Domain representation of a screening Session."""

    id: SessionId
    movie_title: MovieTitle
    hall_id: HallId
    starts_at: datetime
    duration_minutes: DurationMinutes

    @property
    def ends_at(self) -> datetime:
        return self.starts_at + timedelta(minutes=self.duration_minutes.value)


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    session_id: SessionId
    full_name: FullName
    tickets: TicketCount


@dataclass(frozen=True)
class SessionSummary:
    """Read projection of a session with its hall and booking aggregates."""

    session: Session
    hall: Hall
    bookings_count: int = 0
    booked_tickets: int = 0

    @property
    def remaining_capacity(self) -> int:
        return max(self.hall.capacity.value - self.booked_tickets, 0)
