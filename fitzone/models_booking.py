from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

BOOKING_STATUSES = ("confirmed", "cancelled", "completed", "no-show")
WAITLIST_STATUSES = ("waiting", "offered", "expired", "converted")
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class Booking(Base):
    __tablename__ = "bookings"
    # One seat per member per class slot. Cancelled rows keep the slot reserved in the
    # index, so rebooking re-activates the existing row instead of inserting.
    __table_args__ = (
        UniqueConstraint(
            "member_id", "class_id", "booking_date", "start_time", name="uq_booking_member_slot"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("gym_classes.id"), nullable=False, index=True)
    class_name = Column(String(100), nullable=False)
    trainer_id = Column(Integer, ForeignKey("trainers.id"), nullable=True)
    trainer_name = Column(String(100), nullable=True)
    booking_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)
    duration = Column(Integer, default=60)
    status = Column(String(20), default="confirmed", nullable=False)
    booking_type = Column(String(20), default="single")  # single, recurring
    recurring_booking_id = Column(Integer, ForeignKey("recurring_bookings.id"), nullable=True)
    location = Column(String(100), default="Main Studio")
    notes = Column(Text, nullable=True)
    checked_in = Column(Boolean, default=False)
    checked_in_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    cancellation_reason = Column(String(255), nullable=True)
    price = Column(Float, default=0)
    payment_status = Column(String(20), default="free")  # pending, paid, free, refunded
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    member = relationship("Member")
    gym_class = relationship("GymClass")

    @property
    def formatted_date(self) -> str:
        d = self.booking_date
        return f"{d:%A, %B} {d.day}, {d.year}" if d else ""

    @property
    def formatted_time(self) -> str:
        return f"{self.start_time} - {self.end_time}"


class RecurringBooking(Base):
    __tablename__ = "recurring_bookings"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("gym_classes.id"), nullable=False)
    class_name = Column(String(100), nullable=False)
    trainer_id = Column(Integer, ForeignKey("trainers.id"), nullable=True)
    trainer_name = Column(String(100), nullable=True)
    recurrence_type = Column(String(10), nullable=False)  # weekly, monthly
    recurrence_day = Column(String(10), nullable=False)  # Monday..Sunday
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    duration = Column(Integer, default=60)
    status = Column(String(20), default="active")  # active, paused, cancelled, completed
    total_sessions = Column(Integer, default=0)
    completed_sessions = Column(Integer, default=0)
    missed_sessions = Column(Integer, default=0)
    next_booking_date = Column(Date, nullable=True)
    location = Column(String(100), default="Main Studio")
    price = Column(Float, default=0)
    payment_status = Column(String(20), default="free")
    auto_renew = Column(Boolean, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    bookings = relationship("Booking", backref="recurring_booking")

    @property
    def remaining_sessions(self) -> int:
        return max(0, self.total_sessions - self.completed_sessions - self.missed_sessions)

    @property
    def progress_percentage(self) -> int:
        if not self.total_sessions:
            return 0
        return round(self.completed_sessions / self.total_sessions * 100)

    @property
    def formatted_schedule(self) -> str:
        return f"{self.recurrence_type.capitalize()} on {self.recurrence_day} at {self.start_time}"


class Waitlist(Base):
    __tablename__ = "waitlist"
    __table_args__ = (
        UniqueConstraint(
            "member_id", "class_id", "booking_date", "start_time", name="uq_waitlist_member_slot"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("gym_classes.id"), nullable=False)
    class_name = Column(String(100), nullable=False)
    booking_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=True)
    position = Column(Integer, nullable=False)
    status = Column(String(20), default="waiting", nullable=False)
    notified_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
