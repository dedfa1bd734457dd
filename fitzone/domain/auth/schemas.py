"""Auth domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_indian_phone


class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=50)
    email: str
    phone: Optional[str] = None
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_indian_phone(v)
        return v

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Please provide your full name")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UpdateDetailsRequest(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_indian_phone(v)
        return v


class UpdatePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class ForgotPasswordRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class ResetPasswordRequest(BaseModel):
    token: str
    password: str = Field(..., min_length=6)


class SubscriptionInfo(BaseModel):
    plan_id: Optional[int] = None
    plan_name: Optional[str] = None
    amount: Optional[float] = None
    billing_cycle: Optional[str] = None
    paid_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    payment_id: Optional[str] = None
    status: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    role: str
    avatar: Optional[str] = None
    is_active: bool
    subscription: Optional[SubscriptionInfo] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            role=user.role,
            avatar=user.avatar,
            is_active=user.is_active,
            subscription=user.subscription_dict(),
            created_at=user.created_at,
        )
