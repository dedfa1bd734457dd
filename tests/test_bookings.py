from datetime import date, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from fitzone.domain.bookings.repository import BookingRepository
from fitzone.models_booking import Booking, Waitlist

NEXT_WEEK = (date.today() + timedelta(days=7)).isoformat()


def booking_payload(class_id, booking_date=NEXT_WEEK, start="10:00", end="11:00"):
    return {"class_id": class_id, "booking_date": booking_date, "start_time": start, "end_time": end}


def test_create_booking(client, gym_class, member_headers):
    response = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Booking created successfully"
    assert body["data"]["status"] == "confirmed"
    assert body["data"]["class_name"] == "Morning Yoga"


def test_missing_details(client, gym_class, member_headers):
    response = client.post("/api/bookings", json={"class_id": gym_class.id}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "All booking details are required"


def test_duplicate_booking_rejected(client, gym_class, member_headers):
    client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    again = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "You already have a booking for this class at this time"


def test_slot_uniqueness_enforced_by_database(db, gym_class, member):
    slot = dict(
        member_id=member.member_profile.id,
        class_id=gym_class.id,
        class_name=gym_class.name,
        booking_date=date.today() + timedelta(days=3),
        start_time="09:00",
        end_time="10:00",
    )
    db.add(Booking(**slot))
    db.commit()
    db.add(Booking(**slot))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_full_slot_joins_waitlist_and_cancel_promotes(client, gym_class, member_headers, make_member, auth_headers):
    # capacity is 2
    first = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    client.post(
        "/api/bookings", json=booking_payload(gym_class.id), headers=auth_headers(make_member("b@fitzone.in"))
    )

    waiting_headers = auth_headers(make_member("c@fitzone.in"))
    waitlisted = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=waiting_headers)
    assert waitlisted.status_code == 201
    assert waitlisted.json()["data"]["type"] == "waitlist"
    assert waitlisted.json()["data"]["position"] == 1

    again = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=waiting_headers)
    assert again.json()["message"] == "You are already on the waitlist for this class"

    availability = client.get(f"/api/bookings/availability/{gym_class.id}/{NEXT_WEEK}").json()["data"]
    assert availability["is_full"] is True
    assert availability["waitlist_count"] == 1

    cancelled = client.delete(f"/api/bookings/{first.json()['data']['id']}", headers=member_headers)
    assert cancelled.status_code == 200

    promoted = client.get("/api/bookings/my-bookings", headers=waiting_headers).json()["data"]
    assert len(promoted["upcoming"]) == 1
    assert client.get("/api/bookings/waitlist", headers=waiting_headers).json()["data"] == []


def test_rebook_after_cancel_reuses_slot(client, gym_class, member_headers):
    created = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    client.delete(f"/api/bookings/{created.json()['data']['id']}", headers=member_headers)

    rebooked = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    assert rebooked.status_code == 201
    assert rebooked.json()["data"]["id"] == created.json()["data"]["id"]


def test_cancel_too_close_to_start(client, gym_class, member_headers):
    soon = datetime.now() + timedelta(minutes=30)
    payload = booking_payload(gym_class.id, soon.date().isoformat(), soon.strftime("%H:%M"), "23:59")
    created = client.post("/api/bookings", json=payload, headers=member_headers)

    response = client.delete(f"/api/bookings/{created.json()['data']['id']}", headers=member_headers)
    assert response.status_code == 400
    assert "2 hours" in response.json()["message"]


def test_cannot_cancel_someone_elses_booking(client, gym_class, member_headers, make_member, auth_headers):
    created = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    other = auth_headers(make_member("x@fitzone.in"))
    response = client.delete(f"/api/bookings/{created.json()['data']['id']}", headers=other)
    assert response.status_code == 403


def test_weekly_recurring_booking(client, gym_class, member_headers):
    start = date.today() + timedelta(days=1)
    end = start + timedelta(days=27)
    payload = {
        "class_id": gym_class.id,
        "recurrence_type": "weekly",
        "recurrence_day": start.strftime("%A"),
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "start_time": "07:00",
        "end_time": "08:00",
    }
    response = client.post("/api/bookings/recurring", json=payload, headers=member_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["bookings_created"] == 4
    assert data["total_sessions"] == 4
    assert response.json()["message"] == "Recurring booking created with 4 individual bookings"


def test_recurring_end_before_start(client, gym_class, member_headers):
    payload = {
        "class_id": gym_class.id,
        "recurrence_type": "monthly",
        "recurrence_day": "Monday",
        "start_date": "2030-02-01",
        "end_date": "2030-01-01",
        "start_time": "07:00",
        "end_time": "08:00",
    }
    response = client.post("/api/bookings/recurring", json=payload, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "End date must be after start date"


def test_duplicate_insert_surfaces_as_409(client, gym_class, member_headers, monkeypatch):
    client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)

    # hide the existing row so the second insert reaches the unique constraint
    monkeypatch.setattr(BookingRepository, "find_slot_booking", staticmethod(lambda *args: None))
    response = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Duplicate record"}


def test_promotion_skips_waiting_member_who_already_holds_the_slot(
    client, db, gym_class, member, member_headers, make_member, auth_headers
):
    client.post("/api/bookings", json=booking_payload(gym_class.id), headers=member_headers)
    leaving_headers = auth_headers(make_member("b@fitzone.in"))
    leaving = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=leaving_headers)

    # stale entry at the head of the queue for a member who is already booked
    stale = Waitlist(
        member_id=member.member_profile.id,
        class_id=gym_class.id,
        class_name=gym_class.name,
        booking_date=date.fromisoformat(NEXT_WEEK),
        start_time="10:00",
        end_time="11:00",
        position=0,
    )
    db.add(stale)
    db.commit()

    waiting_headers = auth_headers(make_member("c@fitzone.in"))
    waitlisted = client.post("/api/bookings", json=booking_payload(gym_class.id), headers=waiting_headers)
    assert waitlisted.json()["data"]["type"] == "waitlist"

    client.delete(f"/api/bookings/{leaving.json()['data']['id']}", headers=leaving_headers)

    promoted = client.get("/api/bookings/my-bookings", headers=waiting_headers).json()["data"]
    assert len(promoted["upcoming"]) == 1
    db.refresh(stale)
    assert stale.status == "expired"

    availability = client.get(f"/api/bookings/availability/{gym_class.id}/{NEXT_WEEK}").json()["data"]
    assert availability["booked_count"] == 2
    assert availability["waitlist_count"] == 0
