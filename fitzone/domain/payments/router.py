"""Membership payment router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...config import RAZORPAY_KEY_ID
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .schemas import CreateOrderRequest, PaymentResponse, VerifyPaymentRequest
from .service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


@router.get("/key")
async def get_razorpay_key():
    """Publishable Razorpay key id for the checkout widget"""
    return success(key=RAZORPAY_KEY_ID)


@router.post("/create-order")
async def create_order(
    data: CreateOrderRequest,
    _: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return success(await service.create_order(data))


@router.post("/verify")
async def verify_payment(
    data: VerifyPaymentRequest,
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    result = service.verify_payment(data, current_user)
    result["payment"] = PaymentResponse.model_validate(result["payment"])
    return success(result, message="Payment verified and saved successfully")


@router.get("/check-subscription")
async def check_subscription(
    plan_name: Optional[str] = Query(None),
    amount: Optional[float] = Query(None),
    current_user: User = Depends(get_current_user),
    service: PaymentService = Depends(get_payment_service),
):
    return success(service.check_subscription(current_user, plan_name, amount))


@router.get("/stats")
async def get_payment_stats(
    _: User = Depends(admin_required),
    service: PaymentService = Depends(get_payment_service),
):
    return success(service.stats())


@router.get("")
async def get_all_payments(
    _: User = Depends(admin_required),
    service: PaymentService = Depends(get_payment_service),
):
    payments = [PaymentResponse.from_payment(p) for p in service.list_payments()]
    return success(payments, count=len(payments))


__all__ = ["router"]
