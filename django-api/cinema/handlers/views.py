"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to cinema.handlers.errors for mapping
- Never contain business logic
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from cinema.cache import HALLS_LIST_KEY
from cinema.handlers.dependencies import (
    cinema_setting,
    get_booking_service,
    get_session_service,
)
from cinema.handlers.serializers import (
    BookingInputSerializer,
    BookingMoveSerializer,
    BookingSerializer,
    BookingUpdateSerializer,
    HallSerializer,
    SessionInputSerializer,
    SessionSerializer,
)


def _parse(serializer_class, request: Request) -> dict:
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class HallListView(APIView):
    """Handler for GET /api/halls"""

    def get(self, request: Request) -> Response:
        payload = cache.get(HALLS_LIST_KEY)
        if payload is None:
            halls = get_session_service().list_halls()
            payload = {"halls": list(HallSerializer(halls, many=True).data)}
            cache.set(HALLS_LIST_KEY, payload, cinema_setting("HALLS_CACHE_TIMEOUT"))
        return Response(payload)


class SessionListView(APIView):
    """Handler for GET and POST /api/sessions"""

    def get(self, request: Request) -> Response:
        sessions = get_session_service().list_sessions()
        return Response({"sessions": SessionSerializer(sessions, many=True).data})

    def post(self, request: Request) -> Response:
        data = _parse(SessionInputSerializer, request)
        session = get_session_service().create_session(
            movie_title=data["movieTitle"],
            hall_id=data["hallId"],
            starts_at=data["startsAt"],
            duration_minutes=data["duration_minutes"],
        )
        return Response(
            {"session": SessionSerializer(session).data},
            status=status.HTTP_201_CREATED,
        )


class SessionDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/sessions/{session_id}"""

    def get(self, request: Request, session_id: str) -> Response:
        session = get_session_service().get_session(session_id)
        return Response({"session": SessionSerializer(session).data})

    def put(self, request: Request, session_id: str) -> Response:
        data = _parse(SessionInputSerializer, request)
        session = get_session_service().update_session(
            session_id,
            movie_title=data["movieTitle"],
            hall_id=data["hallId"],
            starts_at=data["startsAt"],
            duration_minutes=data["duration_minutes"],
        )
        return Response({"session": SessionSerializer(session).data})

    def delete(self, request: Request, session_id: str) -> Response:
        get_session_service().delete_session(session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SessionBookingListView(APIView):
    """Handler for GET /api/sessions/{session_id}/bookings"""

    def get(self, request: Request, session_id: str) -> Response:
        bookings = get_booking_service().list_bookings(session_id)
        return Response({"bookings": BookingSerializer(bookings, many=True).data})


class BookingListView(APIView):
    """Handler for POST /api/bookings"""

    def post(self, request: Request) -> Response:
        data = _parse(BookingInputSerializer, request)
        booking = get_booking_service().create_booking(
            session_id=data["sessionId"],
            full_name=data["fullName"],
            tickets=data["tickets"],
        )
        return Response(
            {"booking": BookingSerializer(booking).data},
            status=status.HTTP_201_CREATED,
        )


class BookingDetailView(APIView):
    """Handler for PUT and DELETE /api/bookings/{booking_id}"""

    def put(self, request: Request, booking_id: str) -> Response:
        data = _parse(BookingUpdateSerializer, request)
        booking = get_booking_service().update_booking(
            booking_id,
            full_name=data["fullName"],
            tickets=data["tickets"],
        )
        return Response({"booking": BookingSerializer(booking).data})

    def delete(self, request: Request, booking_id: str) -> Response:
        get_booking_service().delete_booking(booking_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BookingMoveView(APIView):
    """Handler for POST /api/bookings/{booking_id}/move"""

    def post(self, request: Request, booking_id: str) -> Response:
        data = _parse(BookingMoveSerializer, request)
        booking = get_booking_service().move_booking(
            booking_id, target_session_id=data["targetSessionId"]
        )
        return Response({"booking": BookingSerializer(booking).data})
