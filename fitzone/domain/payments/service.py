"""Membership payment service - Razorpay checkout and subscription activation"""

import logging
from collections import OrderedDict
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Payment, User
from ...services.razorpay_service import (
    RazorpayError,
    create_razorpay_order,
    verify_razorpay_signature,
)
from ...shared.dates import add_months
from .schemas import CreateOrderRequest, VerifyPaymentRequest

logger = logging.getLogger(__name__)


def subscription_due_date(paid_at: datetime, billing_cycle: str) -> datetime:
    return add_months(paid_at, 12 if billing_cycle == "yearly" else 1)


def current_subscription(user: User) -> dict:
    return {
        "plan_name": user.subscription_plan_name,
        "amount": user.subscription_amount,
        "paid_date": user.subscription_paid_date,
        "due_date": user.subscription_due_date,
        "billing_cycle": user.subscription_billing_cycle,
    }


class PaymentService:
    def __init__(self, db: Session):
        self.db = db

    async def create_order(self, data: CreateOrderRequest) -> dict:
        if not data.amount or not data.plan_name:
            raise HTTPException(status_code=400, detail="Amount and plan name are required")

        try:
            order = await create_razorpay_order(
                data.amount,
                notes={
                    "plan_id": str(data.plan_id or ""),
                    "plan_name": data.plan_name,
                    "billing_cycle": data.billing_cycle,
                },
            )
        except RazorpayError:
            raise HTTPException(status_code=500, detail="Failed to create payment order")

        return {
            "order": {
                "id": order["id"],
                "amount": order["amount"],
                "currency": order.get("currency", "INR"),
            },
            "plan_name": data.plan_name,
            "billing_cycle": data.billing_cycle,
        }

    def verify_payment(self, data: VerifyPaymentRequest, user: User) -> dict:
        """Record the captured payment and activate the member's subscription"""
        if not verify_razorpay_signature(
            data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature
        ):
            raise HTTPException(status_code=400, detail="Invalid payment signature")

        payment = self.db.query(Payment).filter(Payment.order_id == data.razorpay_order_id).first()
        if payment and payment.user_id != user.id:
            raise HTTPException(status_code=400, detail="Invalid payment signature")
        if payment is None:
            payment = Payment(
                user_id=user.id,
                order_id=data.razorpay_order_id,
                payment_id=data.razorpay_payment_id,
                signature=data.razorpay_signature,
                amount=data.amount,
                plan_name=data.plan_name,
                plan_id=data.plan_id,
                billing_cycle=data.billing_cycle,
                status="completed",
                method="card",
            )
            self.db.add(payment)

            paid_at = datetime.utcnow()
            user.subscription_plan_id = data.plan_id
            user.subscription_plan_name = data.plan_name
            user.subscription_amount = data.amount
            user.subscription_billing_cycle = data.billing_cycle
            user.subscription_paid_date = paid_at
            user.subscription_due_date = subscription_due_date(paid_at, data.billing_cycle)
            user.subscription_payment_id = data.razorpay_payment_id
            user.subscription_status = "active"
            self.db.commit()
            self.db.refresh(payment)
            logger.info(
                f"✅ Payment {data.razorpay_payment_id} verified: user {user.id} on "
                f"{data.plan_name} ({data.billing_cycle}) until {user.subscription_due_date:%Y-%m-%d}"
            )
        else:
            logger.info(f"Payment for order {data.razorpay_order_id} already recorded")

        return {
            "order_id": data.razorpay_order_id,
            "payment_id": data.razorpay_payment_id,
            "payment": payment,
            "subscription": {
                "plan_name": user.subscription_plan_name,
                "paid_date": user.subscription_paid_date,
                "due_date": user.subscription_due_date,
                "status": user.subscription_status,
            },
        }

    def check_subscription(self, user: User, plan_name: Optional[str], amount: Optional[float]) -> dict:
        """Whether the user may buy `plan_name`: blocks same plan and downgrades while active"""
        if user.subscription_status != "active" or not user.subscription_plan_name:
            return {"can_purchase": True, "message": "No active subscription"}

        due = user.subscription_due_date
        if due and due.replace(tzinfo=None) < datetime.utcnow():
            return {"can_purchase": True, "message": "Subscription expired, can purchase new plan"}

        current = current_subscription(user)
        if user.subscription_plan_name == plan_name:
            return {
                "can_purchase": False,
                "reason": "same_plan",
                "message": (
                    f"You already have an active {plan_name} subscription valid until "
                    f"{due:%d/%m/%Y}" if due else f"You already have an active {plan_name} subscription"
                ),
                "current_subscription": current,
            }

        if amount is not None and amount < (user.subscription_amount or 0):
            return {
                "can_purchase": False,
                "reason": "downgrade",
                "message": (
                    f"You have an active {user.subscription_plan_name} plan "
                    f"(₹{user.subscription_amount:g}). You can only upgrade to a higher plan."
                ),
                "current_subscription": current,
            }

        return {
            "can_purchase": True,
            "reason": "upgrade",
            "message": f"Upgrade from {user.subscription_plan_name} to {plan_name}",
            "current_subscription": current,
        }

    def list_payments(self) -> list[Payment]:
        return (
            self.db.query(Payment)
            .options(joinedload(Payment.user))
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    def stats(self) -> dict:
        total_payments = self.db.query(func.count(Payment.id)).scalar()
        completed = self.db.query(Payment).filter(Payment.status == "completed")
        total_revenue = (
            self.db.query(func.coalesce(func.sum(Payment.amount), 0))
            .filter(Payment.status == "completed")
            .scalar()
        )

        # Last six calendar months, oldest first, including months without revenue
        now = datetime.utcnow()
        months = OrderedDict()
        for offset in range(5, -1, -1):
            month_start = add_months(now.replace(day=1), -offset)
            months[(month_start.year, month_start.month)] = {"total": 0.0, "count": 0}
        window_start = add_months(now.replace(day=1, hour=0, minute=0, second=0, microsecond=0), -5)

        for amount, created_at in completed.filter(Payment.created_at >= window_start).with_entities(
            Payment.amount, Payment.created_at
        ):
            bucket = months.get((created_at.year, created_at.month))
            if bucket is not None:
                bucket["total"] += amount
                bucket["count"] += 1

        return {
            "total_payments": total_payments,
            "completed_payments": completed.count(),
            "total_revenue": total_revenue,
            "monthly_revenue": [
                {"year": year, "month": month, **bucket} for (year, month), bucket in months.items()
            ],
        }
