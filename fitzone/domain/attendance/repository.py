"""Attendance repository - QR tokens and check-in records"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Attendance, QRToken


class QRTokenRepository:
    @staticmethod
    def create(db: Session, token: str, expires_at: datetime, created_by_id: int) -> QRToken:
        qr = QRToken(
            token=token,
            expires_at=expires_at,
            created_by_id=created_by_id,
            used_by=[],
            created_at=datetime.utcnow(),
        )
        db.add(qr)
        db.commit()
        db.refresh(qr)
        return qr

    @staticmethod
    def get_by_token(db: Session, token: str) -> Optional[QRToken]:
        return db.query(QRToken).filter(QRToken.token == token).first()

    @staticmethod
    def latest_active(db: Session, now: datetime) -> Optional[QRToken]:
        return (
            db.query(QRToken)
            .filter(QRToken.expires_at > now)
            .order_by(QRToken.created_at.desc(), QRToken.id.desc())
            .first()
        )

    @staticmethod
    def purge_expired(db: Session, before: datetime) -> int:
        return db.query(QRToken).filter(QRToken.expires_at < before).delete(synchronize_session=False)


class AttendanceRepository:
    @staticmethod
    def for_day(db: Session, user_id: int, day: date) -> Optional[Attendance]:
        return (
            db.query(Attendance)
            .filter(Attendance.user_id == user_id, Attendance.date == day)
            .first()
        )

    @staticmethod
    def open_check_in(db: Session, user_id: int, day: date) -> Optional[Attendance]:
        return (
            db.query(Attendance)
            .filter(
                Attendance.user_id == user_id,
                Attendance.date == day,
                Attendance.status == "checked-in",
            )
            .first()
        )

    @staticmethod
    def in_range(db: Session, user_id: int, start: date, end: date) -> list[Attendance]:
        return (
            db.query(Attendance)
            .filter(Attendance.user_id == user_id, Attendance.date >= start, Attendance.date <= end)
            .order_by(Attendance.date.desc())
            .all()
        )

    @staticmethod
    def on_date(db: Session, day: date) -> list[Attendance]:
        return (
            db.query(Attendance)
            .options(joinedload(Attendance.user))
            .filter(Attendance.date == day)
            .order_by(Attendance.check_in_time.desc())
            .all()
        )

    @staticmethod
    def query_all(db: Session, day: Optional[date] = None, user_id: Optional[int] = None):
        query = db.query(Attendance).options(joinedload(Attendance.user))
        if day:
            query = query.filter(Attendance.date == day)
        if user_id:
            query = query.filter(Attendance.user_id == user_id)
        return query.order_by(Attendance.id.desc())
