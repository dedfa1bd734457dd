"""Member domain schemas"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel


class MemberUser(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class MemberUpdate(BaseModel):
    """Fields a member may edit on their own profile"""

    date_of_birth: Optional[date] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    address: Optional[dict] = None
    emergency_contact: Optional[dict] = None
    health_info: Optional[dict] = None
    fitness_goals: Optional[list[str]] = None
    preferred_workout_time: Optional[Literal["morning", "afternoon", "evening"]] = None


class MemberAdminUpdate(MemberUpdate):
    membership_status: Optional[Literal["active", "inactive", "suspended", "expired"]] = None
    assigned_trainer_id: Optional[int] = None
    notes: Optional[str] = None


class MemberResponse(BaseModel):
    id: int
    user: MemberUser
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[dict] = None
    emergency_contact: Optional[dict] = None
    health_info: Optional[dict] = None
    fitness_goals: Optional[list[str]] = None
    preferred_workout_time: Optional[str] = None
    membership_status: str
    joined_date: Optional[datetime] = None
    assigned_trainer_id: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
