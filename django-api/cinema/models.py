"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Hall(models.Model):
    """Persistence model for screening halls."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gt=0), name="hall_capacity_positive"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.capacity})"


class Session(models.Model):
    """Persistence model for screening sessions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    movie_title = models.CharField(max_length=255)
    hall = models.ForeignKey(Hall, on_delete=models.PROTECT, related_name="sessions")
    starts_at = models.DateTimeField()
    duration_minutes = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["starts_at"], name="session_starts_at_idx"),
            models.Index(fields=["hall", "starts_at"], name="session_hall_starts_at_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(duration_minutes__gt=0),
                name="session_duration_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.movie_title} - {self.starts_at}"


class Booking(models.Model):
    """Persistence model for ticket bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(
        Session, on_delete=models.CASCADE, related_name="bookings"
    )
    full_name = models.CharField(max_length=255)
    tickets = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["session"], name="booking_session_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(tickets__gt=0), name="booking_tickets_positive"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} x{self.tickets}"
