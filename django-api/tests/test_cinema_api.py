"""Integration tests for the cinema booking HTTP API.

Run with: pytest tests/test_cinema_api.py -v
"""

import pytest
from rest_framework.test import APIClient

from cinema import models

NAME = "Ivanov Ivan Ivanovich"
MISSING = "7f0c1c8e-4d7a-4c55-9d0e-0f3c9a3a1b11"


@pytest.fixture
def red_hall():
    return models.Hall.objects.create(name="Red", capacity=50)


@pytest.fixture
def blue_hall():
    return models.Hall.objects.create(name="Blue", capacity=5)


def create_session(client: APIClient, hall, **overrides) -> dict:
    body = {
        "movieTitle": "Solaris",
        "hallId": str(hall.id),
        "startsAt": "2026-11-01T18:00:00Z",
        "durationMinutes": 120,
        **overrides,
    }
    body = {key: value for key, value in body.items() if value is not None}
    response = client.post("/api/sessions", body, format="json")
    assert response.status_code == 201, response.content
    return response.json()["session"]


def create_booking(client: APIClient, session_id: str, tickets: int, full_name: str = NAME):
    return client.post(
        "/api/bookings",
        {"sessionId": session_id, "fullName": full_name, "tickets": tickets},
        format="json",
    )


@pytest.mark.django_db
class TestHalls:
    """Tests for GET /api/halls"""

    def test_list_halls_ordered_by_name(self, api_client: APIClient, red_hall, blue_hall):
        response = api_client.get("/api/halls")

        assert response.status_code == 200
        assert response.json() == {
            "halls": [
                {"id": str(blue_hall.id), "name": "Blue", "capacity": 5},
                {"id": str(red_hall.id), "name": "Red", "capacity": 50},
            ]
        }

    def test_list_halls_empty(self, api_client: APIClient):
        assert api_client.get("/api/halls").json() == {"halls": []}


@pytest.mark.django_db
class TestSessions:
    """Tests for /api/sessions"""

    def test_create_session(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall, startsAt="2026-11-01T21:00:00+03:00")

        assert session["movieTitle"] == "Solaris"
        assert session["startsAt"] == "2026-11-01T18:00:00Z"
        assert session["endsAt"] == "2026-11-01T20:00:00Z"
        assert session["durationMinutes"] == 120
        assert session["hall"] == {"id": str(red_hall.id), "name": "Red", "capacity": 50}
        assert session["bookingsCount"] == 0
        assert session["bookedTickets"] == 0
        assert models.Session.objects.filter(id=session["id"]).exists()

    def test_create_session_with_hours_and_minutes(self, api_client: APIClient, red_hall):
        session = create_session(
            api_client,
            red_hall,
            durationMinutes=None,
            duration={"hours": 2, "minutes": 15},
        )

        assert session["durationMinutes"] == 135

    def test_create_session_requires_duration(self, api_client: APIClient, red_hall):
        response = api_client.post(
            "/api/sessions",
            {"movieTitle": "Solaris", "hallId": str(red_hall.id), "startsAt": "2026-11-01T18:00:00Z"},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    def test_create_session_zero_duration(self, api_client: APIClient, red_hall):
        response = api_client.post(
            "/api/sessions",
            {
                "movieTitle": "Solaris",
                "hallId": str(red_hall.id),
                "startsAt": "2026-11-01T18:00:00Z",
                "durationMinutes": 0,
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert not models.Session.objects.exists()

    @pytest.mark.parametrize(
        "starts_at, duration",
        [
            ("2026-11-01T18:00:00Z", 10**10),
            ("9999-12-31T23:00:00Z", 120),
        ],
    )
    def test_create_session_end_out_of_range(self, api_client: APIClient, red_hall, starts_at, duration):
        response = api_client.post(
            "/api/sessions",
            {
                "movieTitle": "Solaris",
                "hallId": str(red_hall.id),
                "startsAt": starts_at,
                "durationMinutes": duration,
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert not models.Session.objects.exists()
        assert api_client.get("/api/sessions").status_code == 200

    def test_create_session_title_too_long(self, api_client: APIClient, red_hall):
        response = api_client.post(
            "/api/sessions",
            {
                "movieTitle": "x" * 300,
                "hallId": str(red_hall.id),
                "startsAt": "2026-11-01T18:00:00Z",
                "durationMinutes": 90,
            },
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert not models.Session.objects.exists()

    def test_create_session_unknown_hall(self, api_client: APIClient):
        response = api_client.post(
            "/api/sessions",
            {
                "movieTitle": "Solaris",
                "hallId": MISSING,
                "startsAt": "2026-11-01T18:00:00Z",
                "durationMinutes": 90,
            },
            format="json",
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HALL_NOT_FOUND"

    def test_list_sessions_with_aggregates(self, api_client: APIClient, red_hall):
        late = create_session(api_client, red_hall, startsAt="2026-11-01T22:00:00Z")
        early = create_session(api_client, red_hall)
        create_booking(api_client, late["id"], 3)
        create_booking(api_client, late["id"], 4, "Petrov Petr Petrovich")

        sessions = api_client.get("/api/sessions").json()["sessions"]

        assert [s["id"] for s in sessions] == [early["id"], late["id"]]
        assert (sessions[1]["bookingsCount"], sessions[1]["bookedTickets"]) == (2, 7)
        assert sessions[1]["remainingCapacity"] == 43

    def test_update_session(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)

        response = api_client.put(
            f"/api/sessions/{session['id']}",
            {
                "movieTitle": "Stalker",
                "hallId": str(red_hall.id),
                "startsAt": "2026-11-02T18:00:00Z",
                "durationMinutes": 160,
            },
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["session"]["movieTitle"] == "Stalker"
        row = models.Session.objects.get(id=session["id"])
        assert row.duration_minutes == 160

    def test_update_session_hall_too_small(self, api_client: APIClient, red_hall, blue_hall):
        session = create_session(api_client, red_hall)
        create_booking(api_client, session["id"], 8)

        response = api_client.put(
            f"/api/sessions/{session['id']}",
            {
                "movieTitle": "Solaris",
                "hallId": str(blue_hall.id),
                "startsAt": "2026-11-01T18:00:00Z",
                "durationMinutes": 120,
            },
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CAPACITY_EXCEEDED"
        assert models.Session.objects.get(id=session["id"]).hall_id == red_hall.id

    def test_update_session_not_found(self, api_client: APIClient, red_hall):
        response = api_client.put(
            f"/api/sessions/{MISSING}",
            {
                "movieTitle": "Solaris",
                "hallId": str(red_hall.id),
                "startsAt": "2026-11-01T18:00:00Z",
                "durationMinutes": 120,
            },
            format="json",
        )

        assert response.status_code == 404

    def test_delete_session_cascades(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)
        create_booking(api_client, session["id"], 2)

        response = api_client.delete(f"/api/sessions/{session['id']}")

        assert response.status_code == 204
        assert not models.Session.objects.exists()
        assert not models.Booking.objects.exists()
        assert api_client.delete(f"/api/sessions/{session['id']}").status_code == 404

    def test_invalid_session_id_format(self, api_client: APIClient):
        response = api_client.get("/api/sessions/not-a-uuid/bookings")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"


@pytest.mark.django_db
class TestBookings:
    """Tests for /api/bookings"""

    def test_create_and_list(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)

        response = create_booking(api_client, session["id"], 2, "  Ivanov   Ivan Ivanovich")

        assert response.status_code == 201
        booking = response.json()["booking"]
        assert booking["fullName"] == NAME
        assert booking["sessionId"] == session["id"]
        listed = api_client.get(f"/api/sessions/{session['id']}/bookings").json()
        assert listed == {"bookings": [booking]}

    def test_two_word_name_rejected(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)

        response = create_booking(api_client, session["id"], 1, "Ivanov Ivan")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert not models.Booking.objects.exists()

    def test_name_too_long_rejected(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)
        long_name = " ".join(["x" * 100] * 3)

        response = create_booking(api_client, session["id"], 1, long_name)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
        assert not models.Booking.objects.exists()

    def test_capacity_exceeded(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)
        assert create_booking(api_client, session["id"], 50).status_code == 201

        response = create_booking(api_client, session["id"], 1, "Petrov Petr Petrovich")

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "CAPACITY_EXCEEDED"
        assert error["sessionId"] == session["id"]
        assert error["remaining"] == 0
        assert error["shortfall"] == 1

    def test_tickets_must_be_integer(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)

        response = create_booking(api_client, session["id"], "many")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    def test_unknown_session(self, api_client: APIClient):
        response = create_booking(api_client, MISSING, 1)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SESSION_NOT_FOUND"

    def test_update_booking(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)
        booking = create_booking(api_client, session["id"], 5).json()["booking"]

        response = api_client.put(
            f"/api/bookings/{booking['id']}",
            {"fullName": "Ivanova Maria Ivanovna", "tickets": 3},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["booking"]["tickets"] == 3
        assert models.Booking.objects.get(id=booking["id"]).full_name == "Ivanova Maria Ivanovna"

    def test_update_beyond_capacity(self, api_client: APIClient, blue_hall):
        session = create_session(api_client, blue_hall)
        booking = create_booking(api_client, session["id"], 5).json()["booking"]

        response = api_client.put(
            f"/api/bookings/{booking['id']}",
            {"fullName": NAME, "tickets": 6},
            format="json",
        )

        assert response.status_code == 409
        assert response.json()["error"]["remaining"] == 5
        assert response.json()["error"]["shortfall"] == 1
        assert models.Booking.objects.get(id=booking["id"]).tickets == 5

    def test_delete_booking(self, api_client: APIClient, red_hall):
        session = create_session(api_client, red_hall)
        booking = create_booking(api_client, session["id"], 5).json()["booking"]

        assert api_client.delete(f"/api/bookings/{booking['id']}").status_code == 204
        response = api_client.delete(f"/api/bookings/{booking['id']}")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BOOKING_NOT_FOUND"

    def test_move_booking(self, api_client: APIClient, red_hall):
        source = create_session(api_client, red_hall)
        target = create_session(api_client, red_hall, startsAt="2026-11-02T18:00:00Z")
        booking = create_booking(api_client, source["id"], 4).json()["booking"]

        response = api_client.post(
            f"/api/bookings/{booking['id']}/move",
            {"targetSessionId": target["id"]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["booking"]["sessionId"] == target["id"]
        totals = {s["id"]: s["bookedTickets"] for s in api_client.get("/api/sessions").json()["sessions"]}
        assert totals == {source["id"]: 0, target["id"]: 4}

    def test_move_over_capacity_keeps_booking(self, api_client: APIClient, red_hall, blue_hall):
        source = create_session(api_client, red_hall)
        target = create_session(api_client, blue_hall)
        booking = create_booking(api_client, source["id"], 10).json()["booking"]

        response = api_client.post(
            f"/api/bookings/{booking['id']}/move",
            {"targetSessionId": target["id"]},
            format="json",
        )

        assert response.status_code == 409
        assert str(models.Booking.objects.get(id=booking["id"]).session_id) == source["id"]

    def test_move_to_same_session(self, api_client: APIClient, red_hall):
        source = create_session(api_client, red_hall)
        booking = create_booking(api_client, source["id"], 1).json()["booking"]

        response = api_client.post(
            f"/api/bookings/{booking['id']}/move",
            {"targetSessionId": source["id"]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TARGET"

    def test_move_to_other_movie(self, api_client: APIClient, red_hall):
        source = create_session(api_client, red_hall)
        target = create_session(api_client, red_hall, movieTitle="Stalker")
        booking = create_booking(api_client, source["id"], 1).json()["booking"]

        response = api_client.post(
            f"/api/bookings/{booking['id']}/move",
            {"targetSessionId": target["id"]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_TARGET"

    def test_malformed_json(self, api_client: APIClient):
        response = api_client.post(
            "/api/bookings", data="{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "PARSE_ERROR"
