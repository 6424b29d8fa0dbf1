"""Input parsing shared by the services.

Everything here runs before storage or the ledger are touched and turns
``ValueError`` from domain primitives into InvalidInputError.
"""

from datetime import datetime, timedelta, timezone

from cinema.domain import (
    BookingId,
    DurationMinutes,
    FullName,
    HallId,
    MovieTitle,
    SessionId,
    TicketCount,
)
from cinema.domain.errors import InvalidInputError


def parse_hall_id(value: str) -> HallId:
    try:
        return HallId.from_string(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidInputError("Invalid hall ID format") from exc


def parse_session_id(value: str) -> SessionId:
    try:
        return SessionId.from_string(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidInputError("Invalid session ID format") from exc


def parse_booking_id(value: str) -> BookingId:
    try:
        return BookingId.from_string(value)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidInputError("Invalid booking ID format") from exc


def parse_full_name(value: str) -> FullName:
    try:
        return FullName(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def parse_tickets(value: int) -> TicketCount:
    try:
        return TicketCount(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def parse_movie_title(value: str) -> MovieTitle:
    try:
        return MovieTitle(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def parse_duration(value: int) -> DurationMinutes:
    try:
        return DurationMinutes(value)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def parse_starts_at(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are rejected."""
    if not isinstance(value, datetime):
        raise InvalidInputError("Start time must be a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInputError("Start time must include a timezone")
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InvalidInputError("Start time is out of range") from exc


def parse_schedule(starts_at: datetime, duration_minutes: int) -> tuple[datetime, DurationMinutes]:
    """Parse a start time and duration whose end time is representable."""
    start = parse_starts_at(starts_at)
    duration = parse_duration(duration_minutes)
    try:
        start + timedelta(minutes=duration.value)
    except OverflowError as exc:
        raise InvalidInputError("Session end time is out of range") from exc
    return start, duration
