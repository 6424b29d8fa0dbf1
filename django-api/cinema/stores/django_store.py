"""Django ORM implementation of the CinemaStore."""

from collections.abc import Iterator
from contextlib import contextmanager

from django.db import OperationalError, transaction
from django.db.models import Count, IntegerField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from cinema import models
from cinema.domain import (
    Booking,
    BookingId,
    Capacity,
    DurationMinutes,
    FullName,
    Hall,
    HallId,
    MovieTitle,
    Session,
    SessionId,
    SessionSummary,
    TicketCount,
)
from cinema.stores.interfaces import CinemaStore, StoreConflictError


def _to_hall(row: models.Hall) -> Hall:
    return Hall(id=HallId(row.id), name=row.name, capacity=Capacity(row.capacity))


def _to_session(row: models.Session) -> Session:
    return Session(
        id=SessionId(row.id),
        movie_title=MovieTitle(row.movie_title),
        hall_id=HallId(row.hall_id),
        starts_at=row.starts_at,
        duration_minutes=DurationMinutes(row.duration_minutes),
    )


def _to_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        session_id=SessionId(row.session_id),
        full_name=FullName(row.full_name),
        tickets=TicketCount(row.tickets),
    )


def _to_summary(row: models.Session) -> SessionSummary:
    return SessionSummary(
        session=_to_session(row),
        hall=_to_hall(row.hall),
        bookings_count=row.bookings_count,
        booked_tickets=row.booked_tickets,
    )


def _summaries():
    return models.Session.objects.select_related("hall").annotate(
        bookings_count=Count("bookings"),
        booked_tickets=Coalesce(
            Sum("bookings__tickets"), Value(0), output_field=IntegerField()
        ),
    )


class DjangoCinemaStore(CinemaStore):
    """Relational store using Django ORM.

    Session slots are row locks (SELECT ... FOR UPDATE) taken inside one
    atomic block. On backends without row locks (SQLite) the database
    serializes writers and reports contention as OperationalError.
    """

    def list_halls(self) -> list[Hall]:
        return [_to_hall(row) for row in models.Hall.objects.order_by("name", "id")]

    def get_hall(self, hall_id: HallId) -> Hall | None:
        row = models.Hall.objects.filter(id=hall_id.value).first()
        return _to_hall(row) if row else None

    def list_session_summaries(self) -> list[SessionSummary]:
        return [_to_summary(row) for row in _summaries().order_by("starts_at", "id")]

    def get_session_summary(self, session_id: SessionId) -> SessionSummary | None:
        row = _summaries().filter(id=session_id.value).first()
        return _to_summary(row) if row else None

    def get_session(self, session_id: SessionId) -> Session | None:
        row = models.Session.objects.filter(id=session_id.value).first()
        return _to_session(row) if row else None

    def list_bookings(self, session_id: SessionId) -> list[Booking]:
        rows = models.Booking.objects.filter(session_id=session_id.value).order_by(
            "created_at", "id"
        )
        return [_to_booking(row) for row in rows]

    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(id=booking_id.value).first()
        return _to_booking(row) if row else None

    def booked_tickets(
        self, session_id: SessionId, exclude: BookingId | None = None
    ) -> int:
        rows = models.Booking.objects.filter(session_id=session_id.value)
        if exclude is not None:
            rows = rows.exclude(id=exclude.value)
        total = Coalesce(Sum("tickets"), Value(0), output_field=IntegerField())
        return rows.aggregate(total=total)["total"]

    def add_hall(self, hall: Hall) -> None:
        models.Hall.objects.create(
            id=hall.id.value, name=hall.name, capacity=hall.capacity.value
        )

    def add_session(self, session: Session) -> None:
        models.Session.objects.create(
            id=session.id.value,
            movie_title=session.movie_title.value,
            hall_id=session.hall_id.value,
            starts_at=session.starts_at,
            duration_minutes=session.duration_minutes.value,
        )

    def save_session(self, session: Session) -> None:
        models.Session.objects.filter(id=session.id.value).update(
            movie_title=session.movie_title.value,
            hall_id=session.hall_id.value,
            starts_at=session.starts_at,
            duration_minutes=session.duration_minutes.value,
            updated_at=timezone.now(),
        )

    def delete_session(self, session_id: SessionId) -> int:
        _, per_model = models.Session.objects.filter(id=session_id.value).delete()
        return per_model.get(models.Booking._meta.label, 0)

    def add_booking(self, booking: Booking) -> None:
        models.Booking.objects.create(
            id=booking.id.value,
            session_id=booking.session_id.value,
            full_name=booking.full_name.value,
            tickets=booking.tickets.value,
        )

    def save_booking(self, booking: Booking) -> None:
        models.Booking.objects.filter(id=booking.id.value).update(
            session_id=booking.session_id.value,
            full_name=booking.full_name.value,
            tickets=booking.tickets.value,
            updated_at=timezone.now(),
        )

    def delete_booking(self, booking_id: BookingId) -> None:
        models.Booking.objects.filter(id=booking_id.value).delete()

    @contextmanager
    def lock_sessions(self, *session_ids: SessionId) -> Iterator[None]:
        ids = sorted({session_id.value for session_id in session_ids}, key=str)
        try:
            with transaction.atomic():
                list(
                    models.Session.objects.select_for_update()
                    .filter(id__in=ids)
                    .order_by("id")
                    .values_list("id", flat=True)
                )
                yield
        except OperationalError as exc:
            raise StoreConflictError(str(exc)) from exc
