"""Booking router"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, trainer_required
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import (
    BookingCreate,
    BookingResponse,
    RecurringBookingCreate,
    RecurringBookingResponse,
    WaitlistResponse,
)
from .service import BookingService

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("/availability/{class_id}/{booking_date}")
async def get_class_availability(
    class_id: int,
    booking_date: date,
    service: BookingService = Depends(get_booking_service),
):
    """Public seat count for one class on one date"""
    return success(service.availability(class_id, booking_date))


@router.post("", status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    kind, row = service.create_booking(data, current_user)
    if kind == "waitlist":
        entry = WaitlistResponse.model_validate(row)
        return success(
            {"type": "waitlist", "waitlist_entry": entry, "position": entry.position},
            message="Class is full. You have been added to the waitlist.",
        )
    return success(BookingResponse.from_booking(row), message="Booking created successfully")


@router.get("")
async def get_all_bookings(
    _: User = Depends(trainer_required),
    service: BookingService = Depends(get_booking_service),
):
    bookings = [BookingResponse.from_booking(b) for b in service.list_all()]
    return success(bookings, count=len(bookings))


@router.get("/my-bookings")
async def get_my_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    result = service.my_bookings(current_user)
    return success(
        {
            "upcoming": [BookingResponse.from_booking(b) for b in result["upcoming"]],
            "past": [BookingResponse.from_booking(b) for b in result["past"]],
            "total": result["total"],
        }
    )


@router.get("/waitlist")
async def get_my_waitlist(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    entries = service.my_waitlist(current_user)
    return success([WaitlistResponse.model_validate(e) for e in entries])


@router.delete("/waitlist/{entry_id}")
async def remove_from_waitlist(
    entry_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    service.leave_waitlist(entry_id, current_user)
    return success(message="Removed from waitlist successfully")


@router.post("/recurring", status_code=201)
async def create_recurring_booking(
    data: RecurringBookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    template, created = service.create_recurring(data, current_user)
    return success(
        {
            "recurring_booking": RecurringBookingResponse.model_validate(template),
            "bookings_created": created,
            "total_sessions": template.total_sessions,
        },
        message=f"Recurring booking created with {created} individual bookings",
    )


@router.get("/recurring")
async def get_my_recurring_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    templates = service.my_recurring(current_user)
    return success([RecurringBookingResponse.model_validate(t) for t in templates])


@router.delete("/{booking_id}")
async def cancel_booking(
    booking_id: int,
    reason: Optional[str] = Query(None, max_length=255),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    service.cancel_booking(booking_id, current_user, reason)
    return success(message="Booking cancelled successfully")


__all__ = ["router", "get_booking_service"]
