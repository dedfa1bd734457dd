"""
Attendance service
Admins show a rotating QR code at the front desk; members scan it to check in.
A token lives for QR_TOKEN_TTL_SECONDS, each member may use a token once and
check in once per calendar day.
"""

import base64
import calendar
import io
import logging
from datetime import date, datetime, timedelta
from typing import Optional

import qrcode
from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import QR_TOKEN_TTL_SECONDS
from ...models import Attendance, QRToken, User
from ...security_utils import generate_secure_hex
from ...shared.responses import paginate_query
from .repository import AttendanceRepository, QRTokenRepository
from .schemas import MonthlyStats, QRTokenResponse

logger = logging.getLogger(__name__)

# Expired tokens are kept around briefly so late scans get "expired" rather than "invalid"
EXPIRED_TOKEN_RETENTION = timedelta(hours=1)


def render_qr_data_uri(data: str) -> str:
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return f"data:image/png;base64,{base64.b64encode(buffer.getvalue()).decode()}"


def month_bounds(month: Optional[int], year: Optional[int]) -> tuple[date, date]:
    """First and last day of the requested month, or of the current month"""
    if not (month and year):
        today = date.today()
        month, year = today.month, today.year
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def monthly_stats(records: list[Attendance], start: date) -> MonthlyStats:
    days = calendar.monthrange(start.year, start.month)[1]
    return MonthlyStats(
        total_visits=len(records),
        days_in_month=days,
        attendance_percentage=round(len(records) / days * 100, 1),
    )


class AttendanceService:
    def __init__(self, db: Session):
        self.db = db
        self.tokens = QRTokenRepository()
        self.repo = AttendanceRepository()

    # ------------------------------------------------------------------
    # QR tokens
    # ------------------------------------------------------------------

    def _token_response(self, qr: QRToken) -> QRTokenResponse:
        remaining = int((qr.expires_at - datetime.utcnow()).total_seconds())
        return QRTokenResponse(
            token=qr.token,
            expires_at=qr.expires_at,
            expires_in=max(0, remaining),
            qr_code=render_qr_data_uri(qr.token),
        )

    def generate_token(self, admin: User) -> QRTokenResponse:
        now = datetime.utcnow()
        self.tokens.purge_expired(self.db, now - EXPIRED_TOKEN_RETENTION)
        qr = self.tokens.create(
            self.db,
            token=generate_secure_hex(32),
            expires_at=now + timedelta(seconds=QR_TOKEN_TTL_SECONDS),
            created_by_id=admin.id,
        )
        logger.info(f"🔳 QR token generated by admin {admin.id}, expires {qr.expires_at.isoformat()}")
        return self._token_response(qr)

    def current_token(self, admin: User) -> QRTokenResponse:
        qr = self.tokens.latest_active(self.db, datetime.utcnow())
        if qr is None:
            return self.generate_token(admin)
        return self._token_response(qr)

    def _valid_token(self, token: str) -> QRToken:
        qr = self.tokens.get_by_token(self.db, token)
        if qr is None:
            raise HTTPException(status_code=400, detail="Invalid QR code")
        if datetime.utcnow() > qr.expires_at:
            raise HTTPException(status_code=400, detail="QR code has expired. Please scan the new one.")
        return qr

    # ------------------------------------------------------------------
    # Check-in / check-out
    # ------------------------------------------------------------------

    def mark(self, token: Optional[str], user: User) -> Attendance:
        if not token:
            raise HTTPException(status_code=400, detail="QR token is required")

        qr = self._valid_token(token)

        if user.subscription_status != "active":
            raise HTTPException(
                status_code=403,
                detail="Your membership is not active. Please renew your subscription.",
            )
        if user.subscription_due_date and user.subscription_due_date < datetime.utcnow():
            raise HTTPException(
                status_code=403,
                detail="Your membership has expired. Please renew your subscription.",
            )

        today = date.today()
        if self.repo.for_day(self.db, user.id, today):
            raise HTTPException(status_code=400, detail="Attendance already marked for today")

        used_by = list(qr.used_by or [])
        if any(entry.get("user_id") == user.id for entry in used_by):
            raise HTTPException(status_code=400, detail="You have already used this QR code")
        # Reassign so SQLAlchemy notices the JSON change
        qr.used_by = used_by + [{"user_id": user.id, "used_at": datetime.utcnow().isoformat()}]

        attendance = Attendance(
            user_id=user.id,
            date=today,
            check_in_time=datetime.utcnow(),
            qr_token=token,
            status="checked-in",
        )
        self.db.add(attendance)
        self.db.commit()
        self.db.refresh(attendance)
        logger.info(f"✅ Attendance marked for user {user.id} on {today.isoformat()}")
        return attendance

    def check_out(self, user: User) -> Attendance:
        attendance = self.repo.open_check_in(self.db, user.id, date.today())
        if attendance is None:
            raise HTTPException(
                status_code=400, detail="No check-in found for today or already checked out"
            )

        now = datetime.utcnow()
        attendance.check_out_time = now
        attendance.duration = round((now - attendance.check_in_time).total_seconds() / 60)
        attendance.status = "checked-out"
        self.db.commit()
        self.db.refresh(attendance)
        logger.info(f"👋 User {user.id} checked out after {attendance.duration} minutes")
        return attendance

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def today(self) -> list[Attendance]:
        return self.repo.on_date(self.db, date.today())

    def my_attendance(self, user: User, month: Optional[int], year: Optional[int]) -> dict:
        start, end = month_bounds(month, year)
        records = self.repo.in_range(self.db, user.id, start, end)
        return {
            "period": {"start": start, "end": end},
            "stats": monthly_stats(records, start),
            "today_status": self.repo.for_day(self.db, user.id, date.today()),
            "attendance": records,
        }

    def member_attendance(
        self, user_id: int, viewer: User, month: Optional[int], year: Optional[int]
    ) -> dict:
        if viewer.role != "admin" and viewer.id != user_id:
            raise HTTPException(status_code=403, detail="Not authorized to view this attendance")

        member = self.db.query(User).filter(User.id == user_id).first()
        if not member:
            raise HTTPException(status_code=404, detail="User not found")

        start, end = month_bounds(month, year)
        records = self.repo.in_range(self.db, user_id, start, end)
        return {
            "user": member,
            "period": {"start": start, "end": end},
            "stats": monthly_stats(records, start),
            "attendance": records,
        }

    def list_all(self, page: int, limit: int, day: Optional[date], user_id: Optional[int]):
        return paginate_query(self.repo.query_all(self.db, day, user_id), page, limit)
