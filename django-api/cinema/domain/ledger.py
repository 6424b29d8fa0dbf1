"""Capacity ledger: admission decisions for ticket-count changes.

Pure functions only. Callers supply the hall capacity and the ticket sum
already committed for the session; the ledger never reads or writes state.
"""

from dataclasses import dataclass

from cinema.domain.errors import CapacityExceededError
from cinema.domain.value_objects import Capacity, SessionId


@dataclass(frozen=True)
class Admit:
    """The change fits; ``total`` is the session's ticket sum afterwards."""

    total: int


@dataclass(frozen=True)
class Reject:
    """The change does not fit within the hall capacity."""

    capacity: int
    existing: int
    delta: int

    @property
    def requested(self) -> int:
        return self.existing + self.delta

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.existing, 0)

    @property
    def shortfall(self) -> int:
        return max(self.requested - self.capacity, 0)


Decision = Admit | Reject


def admit_delta(capacity: Capacity, existing_ticket_sum: int, ticket_delta: int) -> Decision:
    """Decide whether ``ticket_delta`` can be applied to a session.

    Admits iff ``0 <= existing_ticket_sum + ticket_delta <= capacity``.
    Filling the hall exactly is admitted.
    """
    total = existing_ticket_sum + ticket_delta
    if 0 <= total <= capacity.value:
        return Admit(total=total)
    return Reject(capacity=capacity.value, existing=existing_ticket_sum, delta=ticket_delta)


def ensure_admitted(
    session_id: SessionId,
    capacity: Capacity,
    existing_ticket_sum: int,
    ticket_delta: int,
) -> int:
    """Return the new ticket sum or raise CapacityExceededError."""
    decision = admit_delta(capacity, existing_ticket_sum, ticket_delta)
    if isinstance(decision, Reject):
        raise CapacityExceededError(
            session_id=str(session_id),
            remaining=decision.remaining,
            shortfall=decision.shortfall,
        )
    return decision.total
