"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID, uuid4

MAX_TEXT_LENGTH = 255
MAX_DURATION_MINUTES = 24 * 60


@dataclass(frozen=True)
class HallId:
    """Unique identifier for a Hall."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SessionId:
    """Unique identifier for a Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)

    def __lt__(self, other: "SessionId") -> bool:
        return str(self.value) < str(other.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Positive integer representing hall capacity."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Capacity must be an integer")
        if self.value < 1:
            raise ValueError("Capacity must be positive")


@dataclass(frozen=True)
class TicketCount:
    """Positive number of tickets held by a booking."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Ticket count must be an integer")
        if self.value < 1:
            raise ValueError("Ticket count must be at least 1")


@dataclass(frozen=True)
class DurationMinutes:
    """Session length in minutes, at most one day."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Duration must be an integer number of minutes")
        if self.value < 1:
            raise ValueError("Duration must be positive")
        if self.value > MAX_DURATION_MINUTES:
            raise ValueError(f"Duration cannot exceed {MAX_DURATION_MINUTES} minutes")


@dataclass(frozen=True)
class MovieTitle:
    """Non-empty movie title, stripped of surrounding whitespace."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Movie title cannot be empty")
        if len(self.value.strip()) > MAX_TEXT_LENGTH:
            raise ValueError(f"Movie title cannot exceed {MAX_TEXT_LENGTH} characters")
        object.__setattr__(self, "value", self.value.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FullName:
    """Booking holder name: surname, given name and patronymic.

    The raw value is trimmed and internal whitespace is collapsed before
    counting tokens, so ``"  Ivanov   Ivan Ivanovich "`` is stored as
    ``"Ivanov Ivan Ivanovich"``.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError("Full name must be a string")
        tokens = self.value.split()
        if len(tokens) != 3:
            raise ValueError("Full name must contain exactly three words")
        normalized = " ".join(tokens)
        if len(normalized) > MAX_TEXT_LENGTH:
            raise ValueError(f"Full name cannot exceed {MAX_TEXT_LENGTH} characters")
        object.__setattr__(self, "value", normalized)

    @property
    def surname(self) -> str:
        return self.value.split(" ")[0]

    @property
    def given_name(self) -> str:
        return self.value.split(" ")[1]

    @property
    def patronymic(self) -> str:
        return self.value.split(" ")[2]

    def __str__(self) -> str:
        return self.value
