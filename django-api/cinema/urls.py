from django.urls import path

from cinema.handlers import (
    BookingDetailView,
    BookingListView,
    BookingMoveView,
    HallListView,
    SessionBookingListView,
    SessionDetailView,
    SessionListView,
)

urlpatterns = [
    path("halls", HallListView.as_view(), name="hall-list"),
    path("sessions", SessionListView.as_view(), name="session-list"),
    path("sessions/<str:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path(
        "sessions/<str:session_id>/bookings",
        SessionBookingListView.as_view(),
        name="session-bookings",
    ),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/move",
        BookingMoveView.as_view(),
        name="booking-move",
    ),
]
