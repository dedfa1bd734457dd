"""Member repository - Database operations for member profiles"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Member
from ...models_booking import Booking, RecurringBooking, Waitlist


class MemberRepository:
    @staticmethod
    def list_members(db: Session) -> list[Member]:
        return (
            db.query(Member)
            .options(joinedload(Member.user))
            .order_by(Member.joined_date.desc(), Member.id.desc())
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, member_id: int) -> Optional[Member]:
        return db.query(Member).options(joinedload(Member.user)).filter(Member.id == member_id).first()

    @staticmethod
    def get_by_user_id(db: Session, user_id: int) -> Optional[Member]:
        return db.query(Member).filter(Member.user_id == user_id).first()

    @staticmethod
    def update(db: Session, member: Member, **updates) -> Member:
        for key, value in updates.items():
            if hasattr(member, key):
                setattr(member, key, value)
        db.commit()
        db.refresh(member)
        return member

    @staticmethod
    def delete(db: Session, member: Member) -> None:
        """Delete the profile and the bookings that hang off it"""
        for model in (Booking, Waitlist, RecurringBooking):
            db.query(model).filter(model.member_id == member.id).delete(synchronize_session=False)
        db.delete(member)
        db.commit()
