"""Marketing page content: team members and testimonials"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SocialLinks(BaseModel):
    linkedin: Optional[str] = ""
    twitter: Optional[str] = ""
    instagram: Optional[str] = ""


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=100)
    image: Optional[str] = ""
    bio: Optional[str] = ""
    social_media: SocialLinks = SocialLinks()
    order: int = 0
    is_active: bool = True


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    bio: Optional[str] = None
    social_media: Optional[SocialLinks] = None
    order: Optional[int] = None
    is_active: Optional[bool] = None


class TeamMemberResponse(BaseModel):
    id: int
    name: str
    role: str
    image: Optional[str] = ""
    bio: Optional[str] = ""
    social_media: Optional[dict] = None
    order: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TestimonialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: str = Field("Member", max_length=100)
    image: Optional[str] = ""
    content: str = Field(..., min_length=1)
    rating: int = Field(5, ge=1, le=5)
    order: int = 0
    is_active: bool = True


class TestimonialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    order: Optional[int] = None
    is_active: Optional[bool] = None


class TestimonialResponse(BaseModel):
    id: int
    name: str
    role: str
    image: Optional[str] = ""
    content: str
    rating: int
    order: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
