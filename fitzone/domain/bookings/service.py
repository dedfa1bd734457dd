"""
Booking service - class slot reservations, waitlists and recurring schedules.

A member holds at most one row per (class, date, start time). The unique
constraint on bookings covers cancelled rows too, so booking a slot that was
cancelled earlier re-activates that row. Anything that slips past the
application checks is rejected by the database and surfaces as a 409.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import GymClass, Member, User
from ...models_booking import WEEKDAYS, Booking, RecurringBooking, Waitlist
from ...shared.dates import add_months
from ..members.service import MemberService
from .repository import BookingRepository
from .schemas import BookingCreate, RecurringBookingCreate

logger = logging.getLogger(__name__)

CANCELLATION_NOTICE_HOURS = 2


def count_sessions(recurrence_type: str, start: date, end: date) -> int:
    if recurrence_type == "weekly":
        return (end - start).days // 7 + 1
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def slot_start(booking_date: date, start_time: str) -> datetime:
    return datetime.combine(booking_date, time.fromisoformat(start_time))


class BookingService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.members = MemberService(db)

    def _get_class(self, class_id: int) -> GymClass:
        gym_class = self.db.get(GymClass, class_id)
        if not gym_class:
            raise HTTPException(status_code=404, detail="Class not found")
        return gym_class

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("⚠️ Duplicate booking rejected by the slot unique constraint")
            raise

    def _reserve(
        self,
        member_id: int,
        gym_class: GymClass,
        booking_date: date,
        start_time: str,
        end_time: str,
        **extra,
    ) -> Booking:
        """Insert a confirmed booking, or re-activate the member's cancelled row for the slot"""
        fields = {
            "class_name": gym_class.name,
            "trainer_id": gym_class.trainer_id,
            "trainer_name": gym_class.trainer_name,
            "end_time": end_time,
            "duration": gym_class.duration,
            "location": gym_class.location,
            "status": "confirmed",
            "cancelled_at": None,
            "cancellation_reason": None,
            **extra,
        }
        booking = self.repo.find_slot_booking(
            self.db, member_id, gym_class.id, booking_date, start_time
        )
        if booking is None:
            booking = Booking(
                member_id=member_id,
                class_id=gym_class.id,
                booking_date=booking_date,
                start_time=start_time,
                **fields,
            )
            self.db.add(booking)
        else:
            for key, value in fields.items():
                setattr(booking, key, value)
        return booking

    # Availability

    def availability(self, class_id: int, booking_date: date) -> dict:
        gym_class = self._get_class(class_id)
        booked = self.repo.count_booked(self.db, class_id, booking_date)
        available = max(0, gym_class.capacity - booked)
        return {
            "class_id": class_id,
            "date": booking_date,
            "capacity": gym_class.capacity,
            "booked_count": booked,
            "available_spots": available,
            "waitlist_count": self.repo.count_waiting(self.db, class_id, booking_date),
            "is_full": available <= 0,
            "can_book": available > 0,
            "can_join_waitlist": True,
        }

    # Single bookings

    def create_booking(self, data: BookingCreate, user: User) -> tuple[str, object]:
        """Book the slot, or join its waitlist when full. Returns (kind, row)."""
        if not (data.class_id and data.booking_date and data.start_time and data.end_time):
            raise HTTPException(status_code=400, detail="All booking details are required")

        gym_class = self._get_class(data.class_id)
        member = self.members.require_profile(user)

        existing = self.repo.find_slot_booking(
            self.db, member.id, gym_class.id, data.booking_date, data.start_time
        )
        if existing and existing.status != "cancelled":
            raise HTTPException(
                status_code=400, detail="You already have a booking for this class at this time"
            )

        booked = self.repo.count_booked(self.db, gym_class.id, data.booking_date, data.start_time)
        if booked >= gym_class.capacity:
            return "waitlist", self._join_waitlist(member, gym_class, data)

        booking = self._reserve(
            member.id,
            gym_class,
            data.booking_date,
            data.start_time,
            data.end_time,
            notes=data.notes,
            booking_type="single",
            recurring_booking_id=None,
            checked_in=False,
            checked_in_at=None,
        )
        self._commit()
        self.db.refresh(booking)
        logger.info(
            f"✅ Booking {booking.id}: member {member.id} -> {gym_class.name} "
            f"{data.booking_date} {data.start_time}"
        )
        return "booking", booking

    def _join_waitlist(self, member: Member, gym_class: GymClass, data: BookingCreate) -> Waitlist:
        entry = self.repo.find_waitlist_entry(
            self.db, member.id, gym_class.id, data.booking_date, data.start_time
        )
        if entry and entry.status in ("waiting", "offered"):
            raise HTTPException(
                status_code=400, detail="You are already on the waitlist for this class"
            )

        position = self.repo.count_waiting(
            self.db, gym_class.id, data.booking_date, data.start_time
        ) + 1
        fields = {
            "class_name": gym_class.name,
            "end_time": data.end_time,
            "position": position,
            "status": "waiting",
            "notified_at": None,
            "expires_at": slot_start(data.booking_date, data.end_time),
        }
        if entry is None:
            entry = Waitlist(
                member_id=member.id,
                class_id=gym_class.id,
                booking_date=data.booking_date,
                start_time=data.start_time,
                **fields,
            )
            self.db.add(entry)
        else:
            for key, value in fields.items():
                setattr(entry, key, value)
        self._commit()
        self.db.refresh(entry)
        logger.info(f"📋 Member {member.id} waitlisted for {gym_class.name} at position {position}")
        return entry

    def my_bookings(self, user: User) -> dict:
        member = self.members.require_profile(user)
        bookings = self.repo.list_for_member(self.db, member.id)

        now = datetime.now()
        cutoff = (now.date(), now.strftime("%H:%M"))
        upcoming = [b for b in bookings if (b.booking_date, b.start_time) > cutoff]
        past = [b for b in bookings if (b.booking_date, b.start_time) <= cutoff]
        return {"upcoming": upcoming, "past": past, "total": len(bookings)}

    def list_all(self) -> list[Booking]:
        return self.repo.list_all(self.db)

    def cancel_booking(self, booking_id: int, user: User, reason: Optional[str] = None) -> None:
        booking = self.repo.get_by_id(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        member = self.members.require_profile(user)
        if booking.member_id != member.id:
            raise HTTPException(status_code=403, detail="Not authorized to cancel this booking")
        if booking.status == "cancelled":
            raise HTTPException(status_code=400, detail="Booking is already cancelled")

        hours_until = (
            slot_start(booking.booking_date, booking.start_time) - datetime.now()
        ).total_seconds() / 3600
        if hours_until < CANCELLATION_NOTICE_HOURS:
            raise HTTPException(
                status_code=400,
                detail="Bookings can only be cancelled at least 2 hours in advance",
            )

        booking.status = "cancelled"
        booking.cancelled_at = datetime.utcnow()
        booking.cancellation_reason = reason
        self._promote_from_waitlist(booking)
        self._commit()
        logger.info(f"❌ Booking {booking_id} cancelled by member {member.id}")

    def _promote_from_waitlist(self, freed: Booking) -> Optional[Booking]:
        """Give the freed seat to the first waiting member who does not already hold it"""
        queue = self.repo.waiting_queue(
            self.db, freed.class_id, freed.booking_date, freed.start_time
        )
        for entry in queue:
            held = self.repo.find_slot_booking(
                self.db, entry.member_id, entry.class_id, entry.booking_date, entry.start_time
            )
            if held is not None and held.status != "cancelled":
                # already seated, so the entry is stale
                entry.status = "expired"
                continue
            break
        else:
            return None

        entry.status = "converted"
        entry.notified_at = datetime.utcnow()
        promoted = self._reserve(
            entry.member_id,
            freed.gym_class,
            entry.booking_date,
            entry.start_time,
            freed.end_time,
            booking_type="single",
            recurring_booking_id=None,
        )
        logger.info(
            f"⬆️ Waitlist entry {entry.id} promoted to a booking for member {entry.member_id}"
        )
        return promoted

    # Waitlist

    def my_waitlist(self, user: User) -> list[Waitlist]:
        member = self.members.require_profile(user)
        return self.repo.list_waitlist_for_member(self.db, member.id)

    def leave_waitlist(self, entry_id: int, user: User) -> None:
        entry = self.repo.get_waitlist_entry(self.db, entry_id)
        if not entry:
            raise HTTPException(status_code=404, detail="Waitlist entry not found")

        member = self.members.require_profile(user)
        if entry.member_id != member.id:
            raise HTTPException(
                status_code=403, detail="Not authorized to remove this waitlist entry"
            )

        entry.status = "expired"
        self.db.commit()

    # Recurring bookings

    def create_recurring(self, data: RecurringBookingCreate, user: User) -> tuple[RecurringBooking, int]:
        """Store the template and materialise a booking for every matching date with room"""
        required = (
            data.class_id,
            data.recurrence_type,
            data.recurrence_day,
            data.start_date,
            data.end_date,
            data.start_time,
            data.end_time,
        )
        if not all(required):
            raise HTTPException(
                status_code=400, detail="All recurring booking details are required"
            )
        if data.end_date < data.start_date:
            raise HTTPException(status_code=400, detail="End date must be after start date")

        gym_class = self._get_class(data.class_id)
        member = self.members.require_profile(user)

        template = RecurringBooking(
            member_id=member.id,
            class_id=gym_class.id,
            class_name=gym_class.name,
            trainer_id=gym_class.trainer_id,
            trainer_name=gym_class.trainer_name,
            recurrence_type=data.recurrence_type,
            recurrence_day=data.recurrence_day,
            start_date=data.start_date,
            end_date=data.end_date,
            start_time=data.start_time,
            end_time=data.end_time,
            duration=gym_class.duration,
            total_sessions=count_sessions(data.recurrence_type, data.start_date, data.end_date),
            location=gym_class.location,
            notes=data.notes,
        )
        self.db.add(template)
        self.db.flush()

        created_dates = []
        current = data.start_date
        if data.recurrence_type == "weekly":
            # first matching weekday on or after the start date
            offset = (WEEKDAYS.index(data.recurrence_day) - current.weekday()) % 7
            current += timedelta(days=offset)
        while current <= data.end_date:
            if WEEKDAYS[current.weekday()] == data.recurrence_day:
                held = self.repo.find_slot_booking(
                    self.db, member.id, gym_class.id, current, data.start_time
                )
                booked = self.repo.count_booked(self.db, gym_class.id, current, data.start_time)
                if not (held and held.status != "cancelled") and booked < gym_class.capacity:
                    self._reserve(
                        member.id,
                        gym_class,
                        current,
                        data.start_time,
                        data.end_time,
                        booking_type="recurring",
                        recurring_booking_id=template.id,
                    )
                    self.db.flush()
                    created_dates.append(current)

            if data.recurrence_type == "weekly":
                current += timedelta(days=7)
            else:
                current = add_months(current)

        template.next_booking_date = created_dates[0] if created_dates else None
        self._commit()
        self.db.refresh(template)
        logger.info(
            f"🔁 Recurring booking {template.id}: {len(created_dates)} of "
            f"{template.total_sessions} sessions booked"
        )
        return template, len(created_dates)

    def my_recurring(self, user: User) -> list[RecurringBooking]:
        member = self.members.require_profile(user)
        return self.repo.list_recurring_for_member(self.db, member.id)
