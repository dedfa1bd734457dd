"""Attendance router - QR check-in for members, registers for admins"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import AttendanceResponse, AttendanceUser, AttendanceWithUser, MarkAttendanceRequest
from .service import AttendanceService

router = APIRouter(prefix="/api/attendance", tags=["Attendance"])


def get_attendance_service(db: Session = Depends(get_db)) -> AttendanceService:
    """Dependency injection for AttendanceService"""
    return AttendanceService(db)


def records_out(records) -> list[AttendanceResponse]:
    return [AttendanceResponse.model_validate(r) for r in records]


@router.post("/generate-qr", status_code=201)
async def generate_qr(
    admin: User = Depends(admin_required),
    service: AttendanceService = Depends(get_attendance_service),
):
    return success(service.generate_token(admin))


@router.get("/current-qr")
async def get_current_qr(
    admin: User = Depends(admin_required),
    service: AttendanceService = Depends(get_attendance_service),
):
    return success(service.current_token(admin))


@router.post("/mark", status_code=201)
async def mark_attendance(
    data: MarkAttendanceRequest,
    current_user: User = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    attendance = service.mark(data.qr_token, current_user)
    return success(
        {"check_in_time": attendance.check_in_time, "date": attendance.date},
        message="Attendance marked successfully!",
    )


@router.post("/checkout")
async def check_out(
    current_user: User = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    attendance = service.check_out(current_user)
    return success(
        {
            "check_in_time": attendance.check_in_time,
            "check_out_time": attendance.check_out_time,
            "duration": attendance.duration,
        },
        message="Checked out successfully!",
    )


@router.get("/today")
async def get_today_attendance(
    _: User = Depends(admin_required),
    service: AttendanceService = Depends(get_attendance_service),
):
    records = [AttendanceWithUser.model_validate(r) for r in service.today()]
    return success(records, count=len(records))


@router.get("/my-attendance")
async def get_my_attendance(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    current_user: User = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    result = service.my_attendance(current_user, month, year)
    today = result["today_status"]
    result["today_status"] = AttendanceResponse.model_validate(today) if today else None
    result["attendance"] = records_out(result["attendance"])
    return success(result)


@router.get("/member/{user_id}")
async def get_member_attendance(
    user_id: int,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    current_user: User = Depends(get_current_user),
    service: AttendanceService = Depends(get_attendance_service),
):
    result = service.member_attendance(user_id, current_user, month, year)
    member = result["user"]
    result["user"] = {
        **AttendanceUser.model_validate(member).model_dump(),
        "subscription": member.subscription_dict(),
    }
    result["attendance"] = records_out(result["attendance"])
    return success(result)


@router.get("")
async def get_all_attendance(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    on_date: Optional[date] = Query(None, alias="date"),
    user_id: Optional[int] = None,
    _: User = Depends(admin_required),
    service: AttendanceService = Depends(get_attendance_service),
):
    records, page_info = service.list_all(page, limit, on_date, user_id)
    return success([AttendanceWithUser.model_validate(r) for r in records], pagination=page_info)


__all__ = ["router"]
