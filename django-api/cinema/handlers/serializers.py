"""Serializers for request bodies and for rendering domain models.

Input serializers only check shape and types; business rules (three-word
names, positive counts, capacity) are enforced by the services.
"""

from rest_framework import serializers


class HallSerializer(serializers.Serializer):
    """Serializer for Hall domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")


class SessionSerializer(serializers.Serializer):
    """Serializer for SessionSummary read model."""

    id = serializers.CharField(source="session.id.value")
    movieTitle = serializers.CharField(source="session.movie_title.value")
    startsAt = serializers.DateTimeField(source="session.starts_at")
    endsAt = serializers.DateTimeField(source="session.ends_at")
    durationMinutes = serializers.IntegerField(source="session.duration_minutes.value")
    hall = HallSerializer()
    bookingsCount = serializers.IntegerField(source="bookings_count")
    bookedTickets = serializers.IntegerField(source="booked_tickets")
    remainingCapacity = serializers.IntegerField(source="remaining_capacity")


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField(source="id.value")
    sessionId = serializers.CharField(source="session_id.value")
    fullName = serializers.CharField(source="full_name.value")
    tickets = serializers.IntegerField(source="tickets.value")


class DurationSerializer(serializers.Serializer):
    hours = serializers.IntegerField(min_value=0, default=0)
    minutes = serializers.IntegerField(min_value=0, default=0)


class SessionInputSerializer(serializers.Serializer):
    """Body of POST /api/sessions and PUT /api/sessions/{id}.

    Duration is accepted either as ``durationMinutes`` or as
    ``duration: {"hours": h, "minutes": m}``.
    """

    movieTitle = serializers.CharField(allow_blank=True, trim_whitespace=False)
    hallId = serializers.CharField()
    startsAt = serializers.DateTimeField()
    durationMinutes = serializers.IntegerField(required=False)
    duration = DurationSerializer(required=False)

    def validate(self, attrs):
        if "durationMinutes" in attrs:
            attrs["duration_minutes"] = attrs.pop("durationMinutes")
            attrs.pop("duration", None)
        elif "duration" in attrs:
            duration = attrs.pop("duration")
            attrs["duration_minutes"] = duration["hours"] * 60 + duration["minutes"]
        else:
            raise serializers.ValidationError(
                {"durationMinutes": "This field is required."}
            )
        return attrs


class BookingInputSerializer(serializers.Serializer):
    """Body of POST /api/bookings."""

    sessionId = serializers.CharField()
    fullName = serializers.CharField(allow_blank=True, trim_whitespace=False)
    tickets = serializers.IntegerField()


class BookingUpdateSerializer(serializers.Serializer):
    """Body of PUT /api/bookings/{id}."""

    fullName = serializers.CharField(allow_blank=True, trim_whitespace=False)
    tickets = serializers.IntegerField()


class BookingMoveSerializer(serializers.Serializer):
    """Body of POST /api/bookings/{id}/move."""

    targetSessionId = serializers.CharField()
