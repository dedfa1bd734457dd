"""
Checkout pricing - promo codes, shipping and order totals.

Pure functions shared by the apply-promo endpoint and order creation, so the
amount a customer is quoted is the amount the order is created with.
"""

import math
from typing import Literal, Optional

from pydantic import BaseModel

FREE_SHIPPING_THRESHOLD = 999
STANDARD_SHIPPING = 99
FLAT100_MINIMUM = 500
FITZONE20_CAP = 200


class PromoResult(BaseModel):
    valid: bool
    code: Optional[str] = None
    type: Optional[Literal["percentage", "flat"]] = None
    value: float = 0
    discount: float = 0
    description: Optional[str] = None
    message: str


class PriceBreakdown(BaseModel):
    subtotal: float
    shipping: float
    discount: float
    total: float
    is_first_order: bool
    promo_code: Optional[str] = None


def round_amount(value: float) -> int:
    """Round half up to whole rupees"""
    return int(math.floor(value + 0.5))


def apply_promo_code(code: Optional[str], subtotal: float, is_first_order: bool) -> PromoResult:
    """
    Validate a promo code against the cart subtotal

    NEW10      10% of subtotal, first order only
    FLAT100    flat ₹100, subtotal of at least ₹500
    FITZONE20  20% of subtotal, capped at ₹200
    """
    code = (code or "").strip().upper()
    if not code:
        return PromoResult(valid=False, message="Please enter a promo code")

    if code == "NEW10":
        if not is_first_order:
            return PromoResult(
                valid=False, code=code, message="This code is only valid for first-time customers"
            )
        return PromoResult(
            valid=True,
            code=code,
            type="percentage",
            value=10,
            discount=round_amount(subtotal * 10 / 100),
            description="10% off for new customers",
            message="Promo code applied! 10% off for new customers",
        )

    if code == "FLAT100":
        if subtotal < FLAT100_MINIMUM:
            return PromoResult(
                valid=False, code=code, message="Minimum order amount ₹500 required for this code"
            )
        return PromoResult(
            valid=True,
            code=code,
            type="flat",
            value=100,
            discount=100,
            description="₹100 off on orders above ₹500",
            message="Promo code applied! ₹100 off",
        )

    if code == "FITZONE20":
        discount = min(round_amount(subtotal * 20 / 100), FITZONE20_CAP)
        return PromoResult(
            valid=True,
            code=code,
            type="flat",
            value=discount,
            discount=discount,
            description="20% off (max ₹200)",
            message=f"Promo code applied! ₹{discount} off",
        )

    return PromoResult(valid=False, code=code, message="Invalid promo code")


def shipping_cost(subtotal: float, is_first_order: bool) -> float:
    if not subtotal or is_first_order:
        return 0
    return 0 if subtotal >= FREE_SHIPPING_THRESHOLD else STANDARD_SHIPPING


def quote(subtotal: float, is_first_order: bool, promo: Optional[PromoResult] = None) -> PriceBreakdown:
    shipping = shipping_cost(subtotal, is_first_order)
    discount = promo.discount if promo and promo.valid else 0
    return PriceBreakdown(
        subtotal=subtotal,
        shipping=shipping,
        discount=discount,
        total=max(0, subtotal + shipping - discount),
        is_first_order=is_first_order,
        promo_code=promo.code if promo and promo.valid else None,
    )
