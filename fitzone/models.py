import re
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

ROLES = ("member", "trainer", "admin")


def slugify(value: str) -> str:
    """Lowercase, strip non-alphanumerics and join words with hyphens"""
    value = re.sub(r"[^a-z0-9]+", "-", (value or "").lower())
    return value.strip("-")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)  # stored lowercase
    phone = Column(String(20), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default="member", nullable=False)  # member, trainer, admin
    avatar = Column(String(500), default="", nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    # Membership subscription (denormalised from the latest verified payment)
    subscription_plan_id = Column(Integer, ForeignKey("subscription_plans.id"), nullable=True)
    subscription_plan_name = Column(String(100), nullable=True)
    subscription_amount = Column(Float, nullable=True)
    subscription_billing_cycle = Column(String(20), nullable=True)  # monthly, yearly
    subscription_paid_date = Column(DateTime, nullable=True)
    subscription_due_date = Column(DateTime, nullable=True)
    subscription_payment_id = Column(String(100), nullable=True)
    subscription_status = Column(String(20), nullable=True)  # active, expired, cancelled
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    member_profile = relationship(
        "Member", back_populates="user", uselist=False, cascade="all, delete-orphan",
        foreign_keys="Member.user_id",
    )

    @property
    def has_subscription(self) -> bool:
        return bool(self.subscription_plan_name)

    def subscription_dict(self) -> Optional[dict]:
        if not self.has_subscription:
            return None
        return {
            "plan_id": self.subscription_plan_id,
            "plan_name": self.subscription_plan_name,
            "amount": self.subscription_amount,
            "billing_cycle": self.subscription_billing_cycle,
            "paid_date": self.subscription_paid_date,
            "due_date": self.subscription_due_date,
            "payment_id": self.subscription_payment_id,
            "status": self.subscription_status,
        }


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)  # male, female, other
    address = Column(JSON, nullable=True)  # {street, city, state, zip_code, country}
    emergency_contact = Column(JSON, nullable=True)  # {name, phone, relationship}
    health_info = Column(JSON, nullable=True)  # {height, weight, medical_conditions, allergies}
    fitness_goals = Column(JSON, default=list)
    preferred_workout_time = Column(String(20), nullable=True)  # morning, afternoon, evening
    membership_status = Column(String(20), default="active", nullable=False)
    joined_date = Column(DateTime(timezone=True), server_default=func.now())
    assigned_trainer_id = Column(Integer, ForeignKey("trainers.id"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="member_profile", foreign_keys=[user_id])
    assigned_trainer = relationship("Trainer")


class Trainer(Base):
    __tablename__ = "trainers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)  # optional linked login
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    image = Column(String(500), default="", nullable=True)
    specializations = Column(JSON, default=list)
    experience = Column(Integer, default=0)  # years
    certifications = Column(JSON, default=list)
    bio = Column(Text, default="")
    hourly_rate = Column(Float, default=50)
    availability = Column(JSON, default=list)  # [{day, start_time, end_time}]
    rating = Column(Float, default=4.5)
    total_reviews = Column(Integer, default=0)
    total_clients = Column(Integer, default=0)
    social_media = Column(JSON, default=dict)  # {instagram, facebook, twitter}
    achievements = Column(JSON, default=list)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")


class ClassEnrollment(Base):
    """Standing enrollment of a member in a class (distinct from dated bookings)"""

    __tablename__ = "class_enrollments"

    id = Column(Integer, primary_key=True, index=True)
    class_id = Column(Integer, ForeignKey("gym_classes.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class GymClass(Base):
    __tablename__ = "gym_classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(String(300), default="")
    type = Column(String(30), nullable=False)  # Yoga, HIIT, Strength Training, ...
    category = Column(String(30), default="Cardio")  # Strength, Cardio, Flexibility, ...
    trainer_id = Column(Integer, ForeignKey("trainers.id"), nullable=True)
    trainer_name = Column(String(100), nullable=True)
    schedules = Column(JSON, default=list)  # [{day, start_time, end_time}]
    duration = Column(Integer, default=60)  # minutes
    capacity = Column(Integer, default=20, nullable=False)
    difficulty = Column(String(20), default="all-levels")
    location = Column(String(100), default="Main Studio")
    image = Column(String(500), default="")
    icon = Column(String(50), default="🏋️")
    color = Column(String(20), default="primary")
    benefits = Column(JSON, default=list)
    equipment = Column(JSON, default=list)
    calories = Column(Integer, default=300)
    intensity = Column(String(20), default="Medium")  # Low, Medium, High, Very High
    rating = Column(Float, default=4.5)
    is_popular = Column(Boolean, default=False)
    is_featured = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    trainer = relationship("Trainer")
    enrollments = relationship("ClassEnrollment", cascade="all, delete-orphan")

    @property
    def enrolled_count(self) -> int:
        return len(self.enrollments)

    @property
    def available_spots(self) -> int:
        return max(0, self.capacity - self.enrolled_count)


class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, default="")
    price = Column(Float, nullable=False)
    duration = Column(Integer, default=1, nullable=False)  # months
    features = Column(JSON, default=list)
    color = Column(String(20), default="primary")
    is_popular = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Payment(Base):
    """Membership payment captured through Razorpay"""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    order_id = Column(String(100), unique=True, nullable=False)
    payment_id = Column(String(100), nullable=True)
    signature = Column(String(255), nullable=True)
    amount = Column(Float, nullable=False)
    currency = Column(String(10), default="INR")
    plan_name = Column(String(100), nullable=False)
    plan_id = Column(Integer, ForeignKey("subscription_plans.id"), nullable=True)
    billing_cycle = Column(String(20), default="monthly")
    status = Column(String(20), default="created")  # created, completed, failed, refunded
    method = Column(String(30), default="razorpay")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")


class QRToken(Base):
    __tablename__ = "qr_tokens"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    used_by = Column(JSON, default=list)  # [{user_id, used_at}]
    created_at = Column(DateTime, nullable=False)


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    check_in_time = Column(DateTime, nullable=False)
    check_out_time = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)  # minutes
    qr_token = Column(String(64), nullable=False)
    status = Column(String(20), default="checked-in")  # checked-in, checked-out
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")


class Conversation(Base):
    """Support thread between one member and the gym admins"""

    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    last_message = Column(String(100), default="")
    last_message_at = Column(DateTime, nullable=True)
    last_message_by = Column(String(10), default="member")  # member, admin
    unread_by_admin = Column(Integer, default=0, nullable=False)
    unread_by_member = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    member = relationship("User")
    messages = relationship(
        "Message", back_populates="conversation", cascade="all, delete-orphan",
        order_by="Message.id",
    )


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    sender_role = Column(String(10), nullable=False)  # member, admin
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, nullable=False)

    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("User")


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(30), nullable=False)  # Cardio, Strength, Free Weights, Machines, ...
    description = Column(Text, default="")
    quantity = Column(Integer, default=1)
    status = Column(String(20), default="available")  # available, in_use, maintenance, out_of_order
    location = Column(String(100), default="")
    purchase_date = Column(Date, nullable=True)
    last_maintenance = Column(Date, nullable=True)
    next_maintenance = Column(Date, nullable=True)
    image = Column(String(500), default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    role = Column(String(100), nullable=False)
    image = Column(String(500), default="")
    bio = Column(Text, default="")
    social_media = Column(JSON, default=dict)  # {linkedin, twitter}
    order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)


class Testimonial(Base):
    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    role = Column(String(100), default="Member")
    image = Column(String(500), default="")
    content = Column(Text, nullable=False)
    rating = Column(Integer, default=5)  # 1-5
    order = Column(Integer, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, nullable=False)
