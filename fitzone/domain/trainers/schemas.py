"""Trainer domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AvailabilitySlot(BaseModel):
    day: str
    start_time: str
    end_time: str


class TrainerBase(BaseModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    specializations: Optional[list[str]] = None
    experience: Optional[int] = Field(None, ge=0)
    certifications: Optional[list[str]] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    availability: Optional[list[AvailabilitySlot]] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    achievements: Optional[list[str]] = None
    social_media: Optional[dict] = None


class TrainerCreate(TrainerBase):
    name: Optional[str] = None  # presence checked in the service for a friendlier message
    user_id: Optional[int] = None


class TrainerUpdate(TrainerBase):
    name: Optional[str] = None
    is_available: Optional[bool] = None


class TrainerResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    specializations: Optional[list[str]] = None
    experience: Optional[int] = None
    certifications: Optional[list[str]] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None
    availability: Optional[list[dict]] = None
    rating: Optional[float] = None
    total_reviews: Optional[int] = None
    total_clients: Optional[int] = None
    achievements: Optional[list[str]] = None
    social_media: Optional[dict] = None
    is_available: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
