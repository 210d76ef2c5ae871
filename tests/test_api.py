"""HTTP bindings."""

import pytest
from fastapi.testclient import TestClient

from app.db.session import get_db
from app.main import app

API = "/api/v1"


@pytest.fixture
def client(session_factory, seed):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def booking_payload(seed, rooms, check_in="2025-01-10", check_out="2025-01-13", **extra):
    return {
        "lead_id": seed.lead.id,
        "homestay_id": seed.homestay.id,
        "check_in_date": check_in,
        "check_out_date": check_out,
        "rooms": [{"room_id": room.id, "number_of_guests": guests} for room, guests in rooms],
        **extra,
    }


def test_create_and_fetch_booking(client, seed):
    response = client.post(
        f"{API}/bookings",
        json=booking_payload(seed, [(seed.room_a, 2), (seed.room_b, 1)], discount_amount="500", tax_percentage="12"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "pending"
    assert body["total_amount"] == "11200.00"
    assert body["tax_amount"] == "1200.00"
    assert [line["total_amount"] for line in body["rooms"]] == ["6000.00", "4500.00"]
    assert response.headers["X-Request-ID"]

    by_id = client.get(f"{API}/bookings/{body['id']}")
    by_reference = client.get(f"{API}/bookings/reference/{body['booking_reference']}")
    assert by_id.status_code == by_reference.status_code == 200
    assert by_id.json()["rooms"] == body["rooms"] == by_reference.json()["rooms"]


def test_room_conflict_is_409(client, seed):
    first = client.post(f"{API}/bookings", json=booking_payload(seed, [(seed.room_a, 1)]))
    second = client.post(
        f"{API}/bookings",
        json=booking_payload(seed, [(seed.room_a, 1)], check_in="2025-01-12", check_out="2025-01-14"),
    )

    assert first.status_code == 201
    assert second.status_code == 409
    error = second.json()["error"]
    assert error["code"] == "ROOM_UNAVAILABLE"
    assert error["details"]["reason"] == "already_booked"
    assert error["details"]["room_id"] == seed.room_a.id


@pytest.mark.parametrize(
    "rooms_attr,guests,code,status",
    [
        ("room_a", 3, "CAPACITY_EXCEEDED", 400),
        ("foreign_room", 1, "ROOM_HOMESTAY_MISMATCH", 400),
        ("blocked_room", 1, "ROOM_UNAVAILABLE", 409),
    ],
)
def test_rejections_map_to_status_codes(client, seed, rooms_attr, guests, code, status):
    response = client.post(f"{API}/bookings", json=booking_payload(seed, [(getattr(seed, rooms_attr), guests)]))

    assert response.status_code == status
    assert response.json()["error"]["code"] == code


def test_invalid_dates_are_400(client, seed):
    response = client.post(
        f"{API}/bookings",
        json=booking_payload(seed, [(seed.room_a, 1)], check_in="2025-01-13", check_out="2025-01-10"),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


def test_unknown_booking_is_404(client):
    response = client.get(f"{API}/bookings/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "BOOKING_NOT_FOUND"


def test_malformed_request_is_422(client, seed):
    payload = booking_payload(seed, [(seed.room_a, 1)])
    payload["rooms"] = []

    assert client.post(f"{API}/bookings", json=payload).status_code == 422


def test_lifecycle_over_http(client, seed):
    booking = client.post(f"{API}/bookings", json=booking_payload(seed, [(seed.room_a, 2)])).json()

    payment = client.post(
        f"{API}/bookings/{booking['id']}/payments",
        json={"amount": "1000", "payment_method": "upi"},
    )
    assert payment.status_code == 201
    assert payment.json()["amount"] == "1000.00"

    check_in = client.post(f"{API}/bookings/{booking['id']}/check-in")
    assert check_in.status_code == 200
    assert check_in.json()["status"] == "checked_in"
    assert check_in.json()["rooms"][0]["status"] == "occupied"

    illegal = client.patch(f"{API}/bookings/{booking['id']}/status", json={"status": "pending"})
    assert illegal.status_code == 400
    assert illegal.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    listed = client.get(f"{API}/bookings", params={"status": "checked_in"})
    assert [b["id"] for b in listed.json()] == [booking["id"]]


def test_release_room_line_over_http(client, seed):
    booking = client.post(
        f"{API}/bookings", json=booking_payload(seed, [(seed.room_a, 1), (seed.room_b, 1)])
    ).json()
    line_id = booking["rooms"][1]["id"]

    released = client.delete(
        f"{API}/bookings/{booking['id']}/rooms/{line_id}", params={"reason": "Guest travelling alone"}
    )

    assert released.status_code == 200
    assert [line["is_cancelled"] for line in released.json()["rooms"]] == [False, True]
    assert released.json()["total_amount"] == booking["total_amount"]

    last = client.delete(f"{API}/bookings/{booking['id']}/rooms/{booking['rooms'][0]['id']}")
    assert last.status_code == 400
    assert last.json()["error"]["code"] == "INVALID_BOOKING_STATE"


def test_list_rejects_inverted_window(client):
    response = client.get(
        f"{API}/bookings",
        params={"check_in_after": "2025-02-01", "check_in_before": "2025-01-01"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_room_availability_and_blocking(client, seed):
    params = {"check_in_date": "2025-05-01", "check_out_date": "2025-05-03"}

    free = client.get(f"{API}/rooms/{seed.room_a.id}/availability", params=params)
    assert free.json()["is_available"] is True

    blocked = client.post(f"{API}/rooms/{seed.room_a.id}/block", json={"reason": "Plumbing work", "maintenance": True})
    assert blocked.status_code == 200
    assert blocked.json()["status"] == "maintenance"

    after = client.get(f"{API}/rooms/{seed.room_a.id}/availability", params=params).json()
    assert after["is_available"] is False
    assert after["reason"] == "maintenance"

    available = client.get(f"{API}/homestays/{seed.homestay.id}/available-rooms", params=params)
    assert {room["room_number"] for room in available.json()} == {"102", "103"}

    client.post(f"{API}/rooms/{seed.room_a.id}/unblock")
    assert client.get(f"{API}/rooms/{seed.room_a.id}/availability", params=params).json()["is_available"] is True


def test_statistics_endpoint(client, seed):
    client.post(f"{API}/bookings", json=booking_payload(seed, [(seed.room_a, 2)]))

    stats = client.get(f"{API}/bookings/statistics", params={"homestay_id": seed.homestay.id}).json()

    assert stats["total_bookings"] == 1
    assert stats["total_revenue"] == "6000.00"
    assert stats["pending_amount"] == "6000.00"


def test_health(client):
    assert client.get(f"{API}/health").json()["status"] == "healthy"
