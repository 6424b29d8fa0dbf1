"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest
from rest_framework.test import APIClient

from cinema.domain import Capacity, Hall, HallId
from cinema.services import BookingService, SessionService
from cinema.stores import InMemoryCinemaStore

EVENING = datetime(2026, 11, 1, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> InMemoryCinemaStore:
    return InMemoryCinemaStore(lock_timeout=1.0)


@pytest.fixture
def make_hall(store):
    def factory(name: str = "Red", capacity: int = 50) -> Hall:
        hall = Hall(id=HallId.new(), name=name, capacity=Capacity(capacity))
        store.add_hall(hall)
        return hall

    return factory


@pytest.fixture
def session_service(store) -> SessionService:
    return SessionService(store)


@pytest.fixture
def booking_service(store) -> BookingService:
    return BookingService(store)


@pytest.fixture
def make_session(session_service):
    """Create a session and return its id as the API would see it."""

    def factory(
        hall: Hall,
        movie_title: str = "Solaris",
        starts_at: datetime = EVENING,
        duration_minutes: int = 120,
    ) -> str:
        summary = session_service.create_session(
            movie_title, str(hall.id), starts_at, duration_minutes
        )
        return str(summary.session.id)

    return factory
