"""Membership plan schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = ""
    price: float = Field(..., ge=0)
    duration: int = Field(1, ge=1)  # months
    features: list[str] = []
    color: Optional[str] = "primary"
    is_popular: bool = False
    is_active: bool = True


class PlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=1)
    features: Optional[list[str]] = None
    color: Optional[str] = None
    is_popular: Optional[bool] = None
    is_active: Optional[bool] = None


class PlanResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    duration: int
    features: list[str] = []
    color: Optional[str] = None
    is_popular: bool
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
