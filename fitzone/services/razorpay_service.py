"""
Razorpay Service
Order creation against the Razorpay Orders API and checkout signature checks.
Shared by membership payments and store orders.
"""

import logging
import time
from typing import Any, Optional

import httpx

from ..config import RAZORPAY_API_URL, RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET
from ..security_utils import compute_hmac_sha256, constant_time_compare, mask_sensitive_data

logger = logging.getLogger(__name__)


class RazorpayError(Exception):
    """Order creation failed or the gateway is not configured"""


def is_configured() -> bool:
    return bool(RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET)


def to_paise(amount: float) -> int:
    return int(round(amount * 100))


async def create_razorpay_order(
    amount: float, receipt: Optional[str] = None, notes: Optional[dict] = None
) -> dict[str, Any]:
    """
    Create a Razorpay order

    Args:
        amount: Amount in rupees (sent to Razorpay in paise)
        receipt: Merchant receipt id, defaults to receipt_<ms timestamp>
        notes: Free-form key/value notes stored with the order

    Returns:
        The order JSON (id, amount, currency, ...)
    """
    if not is_configured():
        raise RazorpayError("Razorpay keys are not configured")

    payload = {
        "amount": to_paise(amount),
        "currency": "INR",
        "receipt": receipt or f"receipt_{int(time.time() * 1000)}",
        "notes": notes or {},
    }
    try:
        async with httpx.AsyncClient(timeout=30.0) as http_client:
            response = await http_client.post(
                f"{RAZORPAY_API_URL}/orders",
                json=payload,
                auth=(RAZORPAY_KEY_ID, RAZORPAY_KEY_SECRET),
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Razorpay request failed: {e}")
        raise RazorpayError(str(e)) from e

    if response.status_code >= 400:
        logger.error(f"❌ Razorpay order creation failed ({response.status_code}): {response.text}")
        raise RazorpayError(f"Razorpay returned {response.status_code}")

    order = response.json()
    logger.info(f"💳 Razorpay order created: {order.get('id')} for ₹{amount}")
    return order


def verify_razorpay_signature(order_id: str, payment_id: str, signature: str) -> bool:
    """HMAC-SHA256 of "order_id|payment_id" with the key secret must equal the signature"""
    if not (RAZORPAY_KEY_SECRET and order_id and payment_id and signature):
        return False

    expected = compute_hmac_sha256(f"{order_id}|{payment_id}", RAZORPAY_KEY_SECRET)
    if not constant_time_compare(expected, signature):
        logger.warning(f"⚠️ Razorpay signature mismatch for order {order_id}: {mask_sensitive_data(signature)}")
        return False
    return True
