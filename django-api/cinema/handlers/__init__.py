from cinema.handlers.views import (
    BookingDetailView,
    BookingListView,
    BookingMoveView,
    HallListView,
    SessionBookingListView,
    SessionDetailView,
    SessionListView,
)

__all__ = [
    "HallListView",
    "SessionListView",
    "SessionDetailView",
    "SessionBookingListView",
    "BookingListView",
    "BookingDetailView",
    "BookingMoveView",
]
