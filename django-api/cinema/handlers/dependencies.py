"""Service wiring for the HTTP handlers, driven by settings.CINEMA."""

from django.conf import settings

from cinema.services import BookingService, SessionService
from cinema.stores.django_store import DjangoCinemaStore

DEFAULTS = {
    "MAX_CONFLICT_RETRIES": 3,
    "REQUIRE_SAME_MOVIE_ON_MOVE": True,
    "HALLS_CACHE_TIMEOUT": 300,
}


def cinema_setting(name: str):
    return getattr(settings, "CINEMA", {}).get(name, DEFAULTS[name])


def get_session_service() -> SessionService:
    return SessionService(
        DjangoCinemaStore(),
        max_attempts=cinema_setting("MAX_CONFLICT_RETRIES"),
    )


def get_booking_service() -> BookingService:
    return BookingService(
        DjangoCinemaStore(),
        max_attempts=cinema_setting("MAX_CONFLICT_RETRIES"),
        require_same_movie=cinema_setting("REQUIRE_SAME_MOVIE_ON_MOVE"),
    )
