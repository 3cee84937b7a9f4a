"""HTTP surface: routing, owner identity and error mapping."""

from datetime import date, timedelta

import pytest

from ritto.models import Business

OWNER_HEADERS = {"X-Owner-Id": "owner-api"}


def _next_monday() -> date:
    today = date.today()
    return today + timedelta(days=(7 - today.weekday()) % 7 or 7)


@pytest.fixture
def setup(client):
    """Business + service + Monday 09:00-12:00 (capacity 1) through the API."""
    resp = client.post("/business/", json={"name": "Peluquería Ñandú"}, headers=OWNER_HEADERS)
    assert resp.status_code == 201
    business = resp.json()

    resp = client.post(
        "/services/",
        json={"name": "Haircut", "price": "1000", "duration": 30},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201
    service = resp.json()

    resp = client.post(
        "/schedules/",
        json={"weekdays": ["monday"], "start_time": "09:00", "end_time": "12:00"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201
    return business, service


def _booking_body(service_id, day, hour="10:00"):
    return {
        "service_id": service_id,
        "date": day.isoformat(),
        "time": hour,
        "customer_name": "Ana",
        "customer_email": "ana@example.com",
        "customer_phone": "+5491100000000",
    }


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["redis"] is True


def test_owner_header_is_required(client):
    assert client.get("/business/").status_code == 401


def test_owner_without_business(client):
    resp = client.get("/business/", headers=OWNER_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_business_slug(setup):
    business, _ = setup
    assert business["slug"] == "peluqueria-nandu"
    assert business["accepts_bookings"] is True


def test_invalid_interval_is_422(client, setup):
    resp = client.patch("/business/", json={"slot_interval_minutes": 25}, headers=OWNER_HEADERS)
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"


def test_overlapping_schedule_is_409(client, setup):
    resp = client.post(
        "/schedules/",
        json={"weekdays": ["tuesday", "monday"], "start_time": "11:00", "end_time": "13:00"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 409
    assert resp.json() == {
        "detail": "Schedule overlaps an existing window on monday",
        "error": "schedule_overlap",
        "weekday": "monday",
    }

    schedules = client.get("/schedules/", headers=OWNER_HEADERS).json()
    assert [s["weekday"] for s in schedules] == ["monday"]


def test_schedule_patch_not_allowed(client, setup):
    assert client.patch("/schedules/1", headers=OWNER_HEADERS).status_code == 405


def test_public_slots_and_booking(client, setup):
    business, service = setup
    monday = _next_monday()

    resp = client.get(
        f"/public/{business['slug']}/slots",
        params={"service_id": service["id"], "date": monday.isoformat()},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["interval_minutes"] == 30
    assert [s["time"] for s in body["slots"]] == [
        "09:00", "09:30", "10:00", "10:30", "11:00", "11:30"
    ]

    resp = client.post(f"/public/{business['id']}/bookings", json=_booking_body(service["id"], monday))
    assert resp.status_code == 201
    created = resp.json()
    assert created["booking"]["status"] == "confirmed"
    assert created["redirect_url"] is None

    resp = client.post(f"/public/{business['id']}/bookings", json=_booking_body(service["id"], monday))
    assert resp.status_code == 409
    assert resp.json()["error"] == "slot_unavailable"

    times = [
        s["time"]
        for s in client.get(
            f"/public/{business['id']}/slots",
            params={"service_id": service["id"], "date": monday.isoformat()},
        ).json()["slots"]
    ]
    assert "10:00" not in times


def test_booking_emits_notification(client, redis, setup):
    business, service = setup

    client.post(f"/public/{business['id']}/bookings", json=_booking_body(service["id"], _next_monday()))

    assert redis.llen("events:notifications") == 1


def test_exception_date_hides_slots(client, setup):
    business, service = setup
    monday = _next_monday()

    resp = client.post(
        "/exception-dates/",
        json={"date": monday.isoformat(), "reason": "Holiday"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201

    resp = client.get(
        f"/public/{business['slug']}/slots",
        params={"service_id": service["id"], "date": monday.isoformat()},
    )
    assert resp.json()["slots"] == []


def test_inverted_exception_range_is_422(client, setup):
    resp = client.post(
        "/exception-dates/",
        json={"date": "2030-07-05", "end_date": "2030-07-01"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 422


def test_owner_transitions(client, setup):
    business, service = setup
    monday = _next_monday()
    booking = client.post(
        f"/public/{business['id']}/bookings", json=_booking_body(service["id"], monday)
    ).json()["booking"]

    resp = client.post(
        f"/bookings/{booking['id']}/transition", json={"status": "no_show"}, headers=OWNER_HEADERS
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "no_show"

    resp = client.post(
        f"/bookings/{booking['id']}/transition", json={"status": "confirmed"}, headers=OWNER_HEADERS
    )
    assert resp.status_code == 409
    assert resp.json()["error"] == "illegal_transition"
    assert resp.json()["current"] == "no_show"

    listed = client.get(
        "/bookings/", params={"date": monday.isoformat(), "status": "no_show"}, headers=OWNER_HEADERS
    ).json()
    assert [b["id"] for b in listed] == [booking["id"]]


def test_other_owner_cannot_see_booking(client, setup):
    business, service = setup
    booking = client.post(
        f"/public/{business['id']}/bookings", json=_booking_body(service["id"], _next_monday())
    ).json()["booking"]

    other = {"X-Owner-Id": "owner-other"}
    client.post("/business/", json={"name": "Other"}, headers=other)

    assert client.get(f"/bookings/{booking['id']}", headers=other).status_code == 404


def test_closed_business_is_403(client, db, setup):
    business, service = setup
    row = db.get(Business, business["id"])
    row.accepts_bookings = False
    db.commit()

    resp = client.post(f"/public/{business['id']}/bookings", json=_booking_body(service["id"], _next_monday()))
    assert resp.status_code == 403
    assert resp.json()["error"] == "booking_closed"


def test_payment_webhook(client, setup):
    resp = client.post("/payments/webhook", json={"payment_id": "unknown"})
    assert resp.status_code == 404

    resp = client.post("/payments/webhook", json={"payment_id": "unknown", "status": "rejected"})
    assert resp.status_code == 200
    assert resp.json() is None


def test_dashboard(client, setup):
    resp = client.get("/dashboard/summary", headers=OWNER_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["top_services"] == []

    resp = client.get(
        "/dashboard/occupancy", params={"date": _next_monday().isoformat()}, headers=OWNER_HEADERS
    )
    assert resp.json()["occupancy"] == 0


def test_clearing_business_setting_is_422(client, setup):
    resp = client.patch("/business/", json={"slot_interval_minutes": None}, headers=OWNER_HEADERS)
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"

    resp = client.get("/business/", headers=OWNER_HEADERS)
    assert resp.json()["slot_interval_minutes"] == 30


def test_clearing_service_field_is_422(client, setup):
    _, service = setup

    resp = client.patch(f"/services/{service['id']}", json={"duration": None}, headers=OWNER_HEADERS)
    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_error"

    resp = client.get(f"/services/{service['id']}", headers=OWNER_HEADERS)
    assert resp.json()["duration"] == 30


def test_rename_keeps_public_link(client, setup):
    business, _ = setup

    resp = client.patch("/business/", json={"name": "Otro Nombre"}, headers=OWNER_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["slug"] == business["slug"]
