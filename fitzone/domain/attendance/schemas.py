"""Attendance schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class MarkAttendanceRequest(BaseModel):
    qr_token: Optional[str] = None


class QRTokenResponse(BaseModel):
    token: str
    expires_at: datetime
    expires_in: int
    qr_code: str  # PNG data URI


class AttendanceUser(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class AttendanceResponse(BaseModel):
    id: int
    user_id: int
    date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    duration: Optional[int] = None
    status: str

    class Config:
        from_attributes = True


class AttendanceWithUser(AttendanceResponse):
    user: Optional[AttendanceUser] = None


class MonthlyStats(BaseModel):
    total_visits: int
    days_in_month: int
    attendance_percentage: float
