"""Concurrency tests for the booking service on the in-memory store.

Run with: pytest tests/test_concurrency.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from cinema.domain.errors import CapacityExceededError

EVENING = datetime(2026, 11, 1, 18, 0, tzinfo=timezone.utc)
NAMES = [
    "Ivanov Ivan Ivanovich",
    "Petrov Petr Petrovich",
    "Sidorova Anna Sergeevna",
    "Kuznetsov Oleg Pavlovich",
]


def _race(workers: int, task):
    """Run ``task(i)`` on ``workers`` threads released at the same moment."""
    barrier = threading.Barrier(workers)

    def run(i):
        barrier.wait()
        try:
            return task(i)
        except CapacityExceededError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(run, range(workers)))


class TestConcurrentCreates:
    """Two cashiers booking the last seats at the same time."""

    def test_only_one_of_two_overflowing_bookings_succeeds(
        self, make_hall, make_session, booking_service, session_service
    ):
        session_id = make_session(make_hall(capacity=50))

        results = _race(2, lambda i: booking_service.create_booking(session_id, NAMES[i], 30))

        failures = [r for r in results if isinstance(r, CapacityExceededError)]
        assert len(failures) == 1
        assert len(booking_service.list_bookings(session_id)) == 1
        assert session_service.get_session(session_id).booked_tickets == 30

    def test_many_small_bookings_never_overfill(
        self, make_hall, make_session, booking_service, session_service
    ):
        session_id = make_session(make_hall(capacity=50))

        results = _race(
            16, lambda i: booking_service.create_booking(session_id, NAMES[i % len(NAMES)], 4)
        )

        successes = [r for r in results if not isinstance(r, CapacityExceededError)]
        assert len(successes) == 12
        assert session_service.get_session(session_id).booked_tickets == 48

    def test_updates_and_creates_share_the_limit(
        self, make_hall, make_session, booking_service, session_service
    ):
        session_id = make_session(make_hall(capacity=10))
        existing = booking_service.create_booking(session_id, NAMES[0], 2)

        def task(i):
            if i == 0:
                return booking_service.update_booking(str(existing.id), NAMES[0], 8)
            return booking_service.create_booking(session_id, NAMES[1], 6)

        _race(2, task)

        assert session_service.get_session(session_id).booked_tickets <= 10


class TestConcurrentMoves:
    """Moves in opposite directions must neither deadlock nor lose tickets."""

    @pytest.fixture
    def two_sessions(self, make_hall, make_session):
        hall = make_hall(capacity=50)
        first = make_session(hall)
        second = make_session(hall, starts_at=EVENING + timedelta(hours=3))
        return first, second

    def test_opposite_moves_complete(self, two_sessions, booking_service, session_service):
        first, second = two_sessions
        left = booking_service.create_booking(first, NAMES[0], 3)
        right = booking_service.create_booking(second, NAMES[1], 4)
        rounds = 50

        def shuttle(booking_id, sessions):
            for n in range(rounds):
                booking_service.move_booking(booking_id, sessions[(n + 1) % 2])

        threads = [
            threading.Thread(target=shuttle, args=(str(left.id), (first, second))),
            threading.Thread(target=shuttle, args=(str(right.id), (second, first))),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not any(thread.is_alive() for thread in threads)
        totals = {str(s.session.id): s.booked_tickets for s in session_service.list_sessions()}
        assert totals == {first: 3, second: 4}

    def test_readers_never_see_a_half_moved_booking(
        self, two_sessions, booking_service, session_service
    ):
        first, second = two_sessions
        moving = booking_service.create_booking(first, NAMES[0], 5)
        booking_service.create_booking(second, NAMES[1], 2)
        done = threading.Event()
        observed: list[int] = []

        def mover():
            for n in range(100):
                booking_service.move_booking(str(moving.id), (second, first)[n % 2])
            done.set()

        def reader():
            while True:
                sessions = session_service.list_sessions()
                observed.append(sum(s.booked_tickets for s in sessions))
                if done.is_set():
                    break

        threads = [threading.Thread(target=mover), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert observed
        assert set(observed) == {7}

    def test_move_and_create_race_for_last_seats(
        self, make_hall, make_session, booking_service, session_service
    ):
        big = make_session(make_hall("Red", 50))
        small = make_session(make_hall("Blue", 5))
        moving = booking_service.create_booking(big, NAMES[0], 4)

        def task(i):
            if i == 0:
                return booking_service.move_booking(str(moving.id), small)
            return booking_service.create_booking(small, NAMES[1], 3)

        results = _race(2, task)

        assert sum(isinstance(r, CapacityExceededError) for r in results) == 1
        assert session_service.get_session(small).booked_tickets <= 5
        total = sum(s.booked_tickets for s in session_service.list_sessions())
        assert total in (4, 7)
