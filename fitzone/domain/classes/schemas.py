"""Class domain schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time_of_day

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
ClassType = Literal[
    "Yoga",
    "HIIT",
    "Strength Training",
    "Cardio",
    "Pilates",
    "Zumba",
    "Boxing",
    "CrossFit",
    "Spinning",
    "Swimming",
    "Functional Training",
    "Kickboxing",
    "Dance Fitness",
    "Meditation",
]
ClassCategory = Literal["Strength", "Cardio", "Flexibility", "Mind & Body", "Combat", "Dance", "Aquatic"]


class ScheduleSlot(BaseModel):
    day: Weekday
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v):
        return validate_time_of_day(v)


class ClassBase(BaseModel):
    short_description: Optional[str] = None
    category: Optional[ClassCategory] = None
    trainer_id: Optional[int] = None
    schedules: Optional[list[ScheduleSlot]] = None
    duration: Optional[int] = Field(None, gt=0)
    capacity: Optional[int] = Field(None, ge=1)
    difficulty: Optional[Literal["beginner", "intermediate", "advanced", "all-levels"]] = None
    location: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    benefits: Optional[list[str]] = None
    equipment: Optional[list[str]] = None
    calories: Optional[int] = Field(None, ge=0)
    intensity: Optional[Literal["Low", "Medium", "High", "Very High"]] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    is_popular: Optional[bool] = None
    is_featured: Optional[bool] = None


class ClassCreate(ClassBase):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    type: ClassType


class ClassUpdate(ClassBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    type: Optional[ClassType] = None
    is_active: Optional[bool] = None


class EnrollRequest(BaseModel):
    user_id: Optional[int] = None  # admins may enroll someone else


class ClassResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    short_description: Optional[str] = None
    type: str
    category: Optional[str] = None
    trainer_id: Optional[int] = None
    trainer_name: Optional[str] = None
    schedules: Optional[list[dict]] = None
    duration: Optional[int] = None
    capacity: int
    enrolled_count: int
    available_spots: int
    difficulty: Optional[str] = None
    location: Optional[str] = None
    image: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    benefits: Optional[list[str]] = None
    equipment: Optional[list[str]] = None
    calories: Optional[int] = None
    intensity: Optional[str] = None
    rating: Optional[float] = None
    is_popular: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
