"""Membership payment schemas"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    amount: Optional[float] = Field(None, gt=0)
    plan_id: Optional[int] = None
    plan_name: Optional[str] = None
    billing_cycle: Literal["monthly", "yearly"] = "monthly"


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    plan_id: Optional[int] = None
    plan_name: str
    billing_cycle: Literal["monthly", "yearly"] = "monthly"
    amount: float = Field(..., gt=0)


class PaymentUser(BaseModel):
    id: Optional[int] = None
    full_name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class PaymentResponse(BaseModel):
    id: int
    user_id: Optional[int] = None
    order_id: str
    payment_id: Optional[str] = None
    amount: float
    currency: str
    plan_name: str
    plan_id: Optional[int] = None
    billing_cycle: str
    status: str
    method: str
    created_at: Optional[datetime] = None
    user: Optional[PaymentUser] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_payment(cls, payment) -> "PaymentResponse":
        response = cls.model_validate(payment)
        if payment.user is None:
            response.user = PaymentUser(full_name="Deleted User", email="N/A")
        return response
