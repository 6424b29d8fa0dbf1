from cinema.services.booking_service import BookingService
from cinema.services.session_service import SessionService

__all__ = ["BookingService", "SessionService"]
