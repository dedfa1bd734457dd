"""Order router - checkout, customer orders and admin fulfilment"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...config import RAZORPAY_KEY_ID
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .order_service import OrderService
from .schemas import (
    ApplyPromoRequest,
    CancelOrderRequest,
    OrderCreate,
    OrderResponse,
    OrderStatus,
    OrderStatusUpdate,
    PaymentStatus,
    VerifyOrderPaymentRequest,
)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency injection for OrderService"""
    return OrderService(db)


def orders_out(orders) -> list[OrderResponse]:
    return [OrderResponse.model_validate(o) for o in orders]


# ============================================================================
# ADMIN (registered before /{order_id})
# ============================================================================


@router.get("/admin/all")
async def get_all_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    search: Optional[str] = None,
    _: User = Depends(admin_required),
    service: OrderService = Depends(get_order_service),
):
    orders, page_info = service.admin_orders(page, limit, status, payment_status, search)
    return success(orders_out(orders), pagination=page_info)


@router.get("/admin/stats")
async def get_order_stats(
    _: User = Depends(admin_required),
    service: OrderService = Depends(get_order_service),
):
    return success(service.stats())


@router.put("/{order_id}/status")
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    _: User = Depends(admin_required),
    service: OrderService = Depends(get_order_service),
):
    order = service.update_status(order_id, data)
    return success(OrderResponse.model_validate(order), message="Order status updated")


# ============================================================================
# CUSTOMER
# ============================================================================


@router.post("/apply-promo")
async def apply_promo(
    data: ApplyPromoRequest,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """Validate a promo code against the current cart and return the price breakdown"""
    promo, price = service.apply_promo(data.code, current_user)
    return success({"promo": promo, "pricing": price}, message=promo.message)


@router.post("", status_code=201)
async def create_order(
    data: OrderCreate,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order, razorpay_order = await service.create_order(data, current_user)
    payload = {"order": OrderResponse.model_validate(order)}
    if razorpay_order:
        payload["razorpay_order"] = {
            "id": razorpay_order["id"],
            "amount": razorpay_order["amount"],
            "currency": razorpay_order.get("currency", "INR"),
        }
        payload["key"] = RAZORPAY_KEY_ID
        return success(payload)
    return success(payload, message="Order placed successfully")


@router.post("/verify-payment")
async def verify_order_payment(
    data: VerifyOrderPaymentRequest,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = await service.verify_payment(data, current_user)
    return success({"order": OrderResponse.model_validate(order)}, message="Payment verified successfully")


@router.get("/my-orders")
async def get_my_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[OrderStatus] = None,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    orders, page_info = service.my_orders(current_user, page, limit, status)
    return success(orders_out(orders), pagination=page_info)


@router.put("/{order_id}/cancel")
async def cancel_order(
    order_id: int,
    data: Optional[CancelOrderRequest] = Body(None),
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.cancel_order(order_id, current_user, data.reason if data else None)
    return success(OrderResponse.model_validate(order), message="Order cancelled successfully")


@router.get("/{order_id}")
async def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return success(OrderResponse.model_validate(service.get_order(order_id, current_user)))


__all__ = ["router"]
