from cinema.domain.models import Booking, Hall, Session, SessionSummary
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

__all__ = [
    "Hall",
    "Session",
    "SessionSummary",
    "Booking",
    "HallId",
    "SessionId",
    "BookingId",
    "Capacity",
    "TicketCount",
    "DurationMinutes",
    "MovieTitle",
    "FullName",
]
