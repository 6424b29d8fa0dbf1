"""Domain error codes for the cinema module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    HALL_NOT_FOUND = "HALL_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    INVALID_TARGET = "INVALID_TARGET"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when input fails validation before touching storage."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)


class HallNotFoundError(DomainError):
    """Raised when a hall is not found."""

    def __init__(self, hall_id: str) -> None:
        super().__init__(code=ErrorCode.HALL_NOT_FOUND, message="Hall not found")
        self.hall_id = hall_id


class SessionNotFoundError(DomainError):
    """Raised when a session is not found."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class BookingNotFoundError(DomainError):
    """Raised when a booking is not found."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_NOT_FOUND,
            message="Booking not found",
        )
        self.booking_id = booking_id


class CapacityExceededError(DomainError):
    """Raised when the ledger rejects a ticket change for a session."""

    def __init__(self, session_id: str, remaining: int, shortfall: int) -> None:
        super().__init__(
            code=ErrorCode.CAPACITY_EXCEEDED,
            message=f"Not enough seats: {remaining} remaining",
        )
        self.session_id = session_id
        self.remaining = remaining
        self.shortfall = shortfall


class InvalidTargetError(DomainError):
    """Raised when a booking cannot be moved to the requested session."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_TARGET, message=message)


class ConflictError(DomainError):
    """Raised when concurrent updates kept colliding after all retries."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CONFLICT,
            message="The operation could not be completed, please retry",
        )
