"""Booking domain schemas"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_time_of_day


class BookingCreate(BaseModel):
    # Optional so the service can answer with a single "details required" message
    class_id: Optional[int] = None
    booking_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time_of_day(v)


class RecurringBookingCreate(BaseModel):
    class_id: Optional[int] = None
    recurrence_type: Optional[Literal["weekly", "monthly"]] = None
    recurrence_day: Optional[
        Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    ] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time_of_day(v)


class BookingMember(BaseModel):
    id: int
    user_id: int
    full_name: Optional[str] = None
    email: Optional[str] = None


class BookingResponse(BaseModel):
    id: int
    member_id: int
    class_id: int
    class_name: str
    trainer_id: Optional[int] = None
    trainer_name: Optional[str] = None
    booking_date: date
    start_time: str
    end_time: str
    duration: Optional[int] = None
    status: str
    booking_type: Optional[str] = None
    recurring_booking_id: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    checked_in: Optional[bool] = None
    checked_in_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    price: Optional[float] = None
    payment_status: Optional[str] = None
    formatted_date: str
    formatted_time: str
    member: Optional[BookingMember] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        data = {
            field: getattr(booking, field)
            for field in cls.model_fields
            if field != "member" and hasattr(booking, field)
        }
        member = booking.member
        if member is not None and member.user is not None:
            data["member"] = BookingMember(
                id=member.id,
                user_id=member.user_id,
                full_name=member.user.full_name,
                email=member.user.email,
            )
        return cls(**data)


class WaitlistResponse(BaseModel):
    id: int
    member_id: int
    class_id: int
    class_name: str
    booking_date: date
    start_time: str
    end_time: Optional[str] = None
    position: int
    status: str
    notified_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecurringBookingResponse(BaseModel):
    id: int
    member_id: int
    class_id: int
    class_name: str
    trainer_id: Optional[int] = None
    trainer_name: Optional[str] = None
    recurrence_type: str
    recurrence_day: str
    start_date: date
    end_date: date
    start_time: str
    end_time: str
    duration: Optional[int] = None
    status: str
    total_sessions: int
    completed_sessions: int
    missed_sessions: int
    remaining_sessions: int
    progress_percentage: int
    formatted_schedule: str
    next_booking_date: Optional[date] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
