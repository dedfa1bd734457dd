from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

EquipmentStatus = Literal["available", "in_use", "maintenance", "out_of_order"]


class EquipmentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., min_length=1, max_length=30)
    description: Optional[str] = ""
    quantity: int = Field(1, ge=0)
    status: EquipmentStatus = "available"
    location: Optional[str] = ""
    purchase_date: Optional[date] = None
    last_maintenance: Optional[date] = None
    next_maintenance: Optional[date] = None
    image: Optional[str] = ""


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=30)
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    status: Optional[EquipmentStatus] = None
    location: Optional[str] = None
    purchase_date: Optional[date] = None
    last_maintenance: Optional[date] = None
    next_maintenance: Optional[date] = None
    image: Optional[str] = None


class EquipmentResponse(EquipmentBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
