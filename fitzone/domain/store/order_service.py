"""
Order service - checkout, payment capture, cancellation and admin fulfilment.

Order lifecycle: pending -> confirmed -> processing -> shipped -> delivered,
with customer cancellation allowed until the order ships. Pricing is always
recomputed on the server from the cart; client-sent discounts are ignored.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...email_service import deliver, send_order_confirmation_email
from ...models import User
from ...models_store import Order, Product
from ...services.razorpay_service import (
    RazorpayError,
    create_razorpay_order,
    verify_razorpay_signature,
)
from ...shared.responses import paginate_query
from .pricing import PriceBreakdown, PromoResult, apply_promo_code, quote
from .repository import CartRepository, OrderRepository, generate_order_number
from .schemas import OrderCreate, OrderStatusUpdate, VerifyOrderPaymentRequest

logger = logging.getLogger(__name__)

NON_CANCELLABLE = ("shipped", "delivered", "cancelled")


def history_entry(status: str, note: str) -> dict:
    return {"status": status, "note": note, "timestamp": datetime.utcnow().isoformat()}


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepository()
        self.carts = CartRepository()

    def is_first_order(self, user: User) -> bool:
        return self.repo.count_for_user(self.db, user.id) == 0

    def _cart_or_400(self, user: User):
        cart = self.carts.get_for_user(self.db, user.id)
        if not cart or not cart.items:
            raise HTTPException(status_code=400, detail="Cart is empty")
        return cart

    def _validated_promo(self, code: Optional[str], subtotal: float, first_order: bool) -> Optional[PromoResult]:
        if not code or not code.strip():
            return None
        promo = apply_promo_code(code, subtotal, first_order)
        if not promo.valid:
            raise HTTPException(status_code=400, detail=promo.message)
        return promo

    def apply_promo(self, code: Optional[str], user: User) -> tuple[PromoResult, PriceBreakdown]:
        """Check a code against the current cart; returns the promo and the resulting quote"""
        cart = self._cart_or_400(user)
        first_order = self.is_first_order(user)
        promo = apply_promo_code(code, cart.total_amount, first_order)
        if not promo.valid:
            raise HTTPException(status_code=400, detail=promo.message)
        return promo, quote(cart.total_amount, first_order, promo)

    @staticmethod
    def _adjust_stock(db: Session, items: list[dict], direction: int) -> None:
        """direction -1 sells the items, +1 puts them back"""
        for item in items:
            product = db.get(Product, item["product_id"])
            if product is None:
                continue
            product.stock = max(0, product.stock + direction * item["quantity"])
            product.sold_count = max(0, (product.sold_count or 0) - direction * item["quantity"])

    def _unavailable_lines(self, items: list[dict]) -> list[str]:
        """Names of order lines the shelf can no longer cover"""
        short = []
        for item in items:
            product = self.db.get(Product, item["product_id"])
            if product is None or not product.is_active or product.stock < item["quantity"]:
                short.append(item["name"])
        return short

    async def create_order(self, data: OrderCreate, user: User) -> tuple[Order, Optional[dict]]:
        """
        Place an order from the user's cart

        Returns:
            (order, razorpay_order) - the gateway order is None for cash on delivery
        """
        cart = self._cart_or_400(user)

        items = []
        for line in cart.items:
            product = line.product
            if not product or not product.is_active:
                raise HTTPException(
                    status_code=400, detail=f'Product "{line.name}" is no longer available'
                )
            if product.stock < line.quantity:
                raise HTTPException(status_code=400, detail=f'Insufficient stock for "{line.name}"')
            items.append(
                {
                    "product_id": product.id,
                    "name": line.name,
                    "price": line.price,
                    "image": line.image,
                    "quantity": line.quantity,
                    "size": line.size,
                    "color": line.color,
                    "flavor": line.flavor,
                }
            )

        subtotal = sum(item["price"] * item["quantity"] for item in items)
        first_order = self.is_first_order(user)
        promo = self._validated_promo(data.promo_code, subtotal, first_order)
        price = quote(subtotal, first_order, promo)

        notes = data.notes
        if first_order:
            notes = f"{notes or ''} [First Order - Free Shipping]".strip()

        is_cod = data.payment_method == "cod"
        history = [history_entry("pending", "Order placed")]
        if is_cod:
            history.append(history_entry("confirmed", "Cash on delivery order confirmed"))

        order = Order(
            order_number=generate_order_number(),
            user_id=user.id,
            items=items,
            shipping_address=data.shipping_address.model_dump(),
            payment_method=data.payment_method,
            payment_status="pending",
            order_status="confirmed" if is_cod else "pending",
            status_history=history,
            items_total=price.subtotal,
            shipping_cost=price.shipping,
            discount=price.discount,
            coupon_code=price.promo_code,
            total_amount=price.total,
            notes=notes,
            created_at=datetime.utcnow(),
        )

        razorpay_order = None
        if not is_cod:
            try:
                razorpay_order = await create_razorpay_order(
                    price.total,
                    receipt=f"order_{order.order_number}",
                    notes={"user_id": str(user.id), "order_number": order.order_number},
                )
            except RazorpayError:
                raise HTTPException(status_code=500, detail="Failed to create payment order")
            order.razorpay_order_id = razorpay_order["id"]

        self.db.add(order)
        if is_cod:
            # Cart is kept for online payments until the payment is verified
            self._adjust_stock(self.db, items, -1)
            self.carts.clear(self.db, user.id)
        self.db.commit()
        self.db.refresh(order)
        logger.info(
            f"🛒 Order {order.order_number} placed by user {user.id}: "
            f"₹{order.total_amount} via {order.payment_method}"
        )

        if is_cod:
            await self._send_confirmation(order)
        return order, razorpay_order

    async def _send_confirmation(self, order: Order) -> None:
        address = order.shipping_address or {}
        if not address.get("email"):
            return
        await deliver(
            send_order_confirmation_email(
                address["email"],
                address.get("full_name", ""),
                order.order_number,
                order.items,
                order.total_amount,
            )
        )

    async def verify_payment(self, data: VerifyOrderPaymentRequest, user: User) -> Order:
        if not verify_razorpay_signature(
            data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature
        ):
            raise HTTPException(status_code=400, detail="Payment verification failed")

        order = self.repo.get_by_id(self.db, data.order_id)
        if not order or order.user_id != user.id:
            raise HTTPException(status_code=404, detail="Order not found")
        if order.razorpay_order_id != data.razorpay_order_id:
            raise HTTPException(status_code=400, detail="Payment verification failed")
        if order.order_status == "cancelled":
            raise HTTPException(status_code=400, detail="Order has been cancelled")
        if order.payment_status == "paid":
            return order

        order.payment_status = "paid"
        order.razorpay_payment_id = data.razorpay_payment_id
        order.razorpay_signature = data.razorpay_signature

        # Stock was only reserved at checkout for COD; it may have sold out since
        short = self._unavailable_lines(order.items)
        if short:
            reason = f"Out of stock at payment: {', '.join(short)}"
            order.order_status = "cancelled"
            order.cancelled_at = datetime.utcnow()
            order.cancel_reason = reason
            order.status_history = [*(order.status_history or []), history_entry("cancelled", reason)]
            self.db.commit()
            logger.warning(
                f"⚠️ Order {order.order_number} paid ({data.razorpay_payment_id}) but cancelled: {reason}"
            )
            raise HTTPException(
                status_code=409,
                detail=(
                    f'Insufficient stock for "{short[0]}". Your payment was recorded and the order '
                    "was cancelled. Please contact support for a refund."
                ),
            )

        order.order_status = "confirmed"
        order.status_history = [*(order.status_history or []), history_entry("confirmed", "Payment received")]
        self._adjust_stock(self.db, order.items, -1)
        self.carts.clear(self.db, user.id)
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"✅ Payment {data.razorpay_payment_id} captured for order {order.order_number}")

        await self._send_confirmation(order)
        return order

    def my_orders(self, user: User, page: int, limit: int, status: Optional[str]) -> tuple[list[Order], dict]:
        return paginate_query(self.repo.for_user(self.db, user.id, status), page, limit)

    def get_order(self, order_id: int, user: User) -> Order:
        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        if order.user_id != user.id and user.role != "admin":
            raise HTTPException(status_code=403, detail="Not authorized to view this order")
        return order

    def cancel_order(self, order_id: int, user: User, reason: Optional[str]) -> Order:
        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        if order.user_id != user.id:
            raise HTTPException(status_code=403, detail="Not authorized")
        if order.order_status in NON_CANCELLABLE:
            raise HTTPException(status_code=400, detail="Order cannot be cancelled")

        # Stock only left the shelf for COD orders and captured online payments
        if order.payment_method == "cod" or order.payment_status == "paid":
            self._adjust_stock(self.db, order.items, +1)

        order.order_status = "cancelled"
        order.cancelled_at = datetime.utcnow()
        order.cancel_reason = reason
        order.status_history = [
            *(order.status_history or []),
            history_entry("cancelled", reason or "Cancelled by customer"),
        ]
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"❌ Order {order.order_number} cancelled by user {user.id}")
        return order

    # Admin

    def admin_orders(
        self,
        page: int,
        limit: int,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Order], dict]:
        query = self.repo.admin_query(self.db, status, payment_status, search)
        return paginate_query(query, page, limit)

    def update_status(self, order_id: int, data: OrderStatusUpdate) -> Order:
        order = self.repo.get_by_id(self.db, order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")

        order.order_status = data.status
        order.status_history = [
            *(order.status_history or []),
            history_entry(data.status, data.note or f"Status updated to {data.status}"),
        ]
        if data.tracking_number:
            order.tracking_number = data.tracking_number
        if data.estimated_delivery:
            order.estimated_delivery = data.estimated_delivery
        if data.status == "delivered":
            order.delivered_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"📦 Order {order.order_number} -> {data.status}")
        return order

    def stats(self) -> dict:
        today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        return self.repo.stats(self.db, today)
