"""Booking repository - slot counts, bookings and waitlist queries"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Member
from ...models_booking import Booking, RecurringBooking, Waitlist


class BookingRepository:
    @staticmethod
    def count_booked(
        db: Session, class_id: int, booking_date: date, start_time: Optional[str] = None
    ) -> int:
        """Non-cancelled bookings for a class on a date (optionally one start time)"""
        query = db.query(Booking).filter(
            Booking.class_id == class_id,
            Booking.booking_date == booking_date,
            Booking.status != "cancelled",
        )
        if start_time is not None:
            query = query.filter(Booking.start_time == start_time)
        return query.count()

    @staticmethod
    def count_waiting(
        db: Session, class_id: int, booking_date: date, start_time: Optional[str] = None
    ) -> int:
        query = db.query(Waitlist).filter(
            Waitlist.class_id == class_id,
            Waitlist.booking_date == booking_date,
            Waitlist.status == "waiting",
        )
        if start_time is not None:
            query = query.filter(Waitlist.start_time == start_time)
        return query.count()

    @staticmethod
    def find_slot_booking(
        db: Session, member_id: int, class_id: int, booking_date: date, start_time: str
    ) -> Optional[Booking]:
        """The member's row for a slot, whatever its status"""
        return (
            db.query(Booking)
            .filter(
                Booking.member_id == member_id,
                Booking.class_id == class_id,
                Booking.booking_date == booking_date,
                Booking.start_time == start_time,
            )
            .first()
        )

    @staticmethod
    def get_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def list_for_member(db: Session, member_id: int) -> list[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.member_id == member_id)
            .order_by(Booking.booking_date, Booking.start_time)
            .all()
        )

    @staticmethod
    def list_all(db: Session) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.member).joinedload(Member.user))
            .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
            .all()
        )

    @staticmethod
    def find_waitlist_entry(
        db: Session, member_id: int, class_id: int, booking_date: date, start_time: str
    ) -> Optional[Waitlist]:
        return (
            db.query(Waitlist)
            .filter(
                Waitlist.member_id == member_id,
                Waitlist.class_id == class_id,
                Waitlist.booking_date == booking_date,
                Waitlist.start_time == start_time,
            )
            .first()
        )

    @staticmethod
    def waiting_queue(
        db: Session, class_id: int, booking_date: date, start_time: str
    ) -> list[Waitlist]:
        """Waiting entries for a slot, first in line first"""
        return (
            db.query(Waitlist)
            .filter(
                Waitlist.class_id == class_id,
                Waitlist.booking_date == booking_date,
                Waitlist.start_time == start_time,
                Waitlist.status == "waiting",
            )
            .order_by(Waitlist.position, Waitlist.id)
            .all()
        )

    @staticmethod
    def get_waitlist_entry(db: Session, entry_id: int) -> Optional[Waitlist]:
        return db.query(Waitlist).filter(Waitlist.id == entry_id).first()

    @staticmethod
    def list_waitlist_for_member(db: Session, member_id: int) -> list[Waitlist]:
        return (
            db.query(Waitlist)
            .filter(Waitlist.member_id == member_id, Waitlist.status.in_(["waiting", "offered"]))
            .order_by(Waitlist.id.desc())
            .all()
        )

    @staticmethod
    def list_recurring_for_member(db: Session, member_id: int) -> list[RecurringBooking]:
        return (
            db.query(RecurringBooking)
            .filter(RecurringBooking.member_id == member_id, RecurringBooking.status != "cancelled")
            .order_by(RecurringBooking.id.desc())
            .all()
        )
