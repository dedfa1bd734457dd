"""Store domain schemas - products, cart and orders"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_indian_phone, validate_pincode

ProductCategory = Literal["supplements", "clothing", "equipment", "accessories"]
OrderStatus = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded"]


# ============================================================================
# PRODUCTS
# ============================================================================


class ProductImage(BaseModel):
    url: str
    public_id: Optional[str] = None


class ProductBase(BaseModel):
    short_description: Optional[str] = Field(None, max_length=300)
    compare_price: Optional[float] = Field(None, ge=0)
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    images: Optional[list[ProductImage]] = None
    thumbnail: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None
    sizes: Optional[list[str]] = None
    colors: Optional[list[str]] = None
    flavors: Optional[list[str]] = None
    weight: Optional[str] = None
    tags: Optional[list[str]] = None
    features: Optional[list[str]] = None
    specifications: Optional[dict[str, str]] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None


class ProductCreate(ProductBase):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    category: ProductCategory
    slug: Optional[str] = None


class ProductUpdate(ProductBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    category: Optional[ProductCategory] = None


class StockUpdate(BaseModel):
    stock: Optional[int] = None


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field("", max_length=1000)


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    name: str
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductSummary(BaseModel):
    """Listing shape (no reviews)"""

    id: int
    name: str
    slug: str
    description: str
    short_description: Optional[str] = None
    price: float
    compare_price: Optional[float] = None
    discount_percentage: int
    category: str
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    images: list[ProductImage] = []
    thumbnail: Optional[str] = None
    stock: int
    in_stock: bool
    sku: Optional[str] = None
    sizes: list[str] = []
    colors: list[str] = []
    flavors: list[str] = []
    weight: Optional[str] = None
    tags: list[str] = []
    features: list[str] = []
    specifications: dict = {}
    rating_average: float = 0
    rating_count: int = 0
    is_featured: bool
    is_active: bool
    sold_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductDetail(ProductSummary):
    reviews: list[ReviewResponse] = []


# ============================================================================
# CART
# ============================================================================


class CartAdd(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)
    size: Optional[str] = None
    color: Optional[str] = None
    flavor: Optional[str] = None


class CartUpdate(BaseModel):
    item_id: int
    quantity: int


class CartItemResponse(BaseModel):
    id: int
    product_id: int
    name: str
    price: float
    image: Optional[str] = None
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None
    flavor: Optional[str] = None
    stock: Optional[int] = None

    class Config:
        from_attributes = True


class CartResponse(BaseModel):
    id: Optional[int] = None
    items: list[CartItemResponse] = []
    total_items: int = 0
    total_amount: float = 0

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        if cart is None:
            return cls()
        items = []
        for item in cart.items:
            line = CartItemResponse.model_validate(item)
            line.stock = item.product.stock if item.product else None
            items.append(line)
        return cls(
            id=cart.id, items=items, total_items=cart.total_items, total_amount=cart.total_amount
        )


# ============================================================================
# ORDERS
# ============================================================================


class ShippingAddress(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    phone: str
    email: str
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: str
    country: str = "India"

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        return validate_indian_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("pincode")
    @classmethod
    def check_pincode(cls, v):
        return validate_pincode(v)


class OrderCreate(BaseModel):
    shipping_address: ShippingAddress
    payment_method: Literal["razorpay", "cod"]
    notes: Optional[str] = Field(None, max_length=500)
    promo_code: Optional[str] = None
    # Client-side pricing hints; the server recomputes both and ignores these
    promo_discount: Optional[float] = None
    free_shipping: Optional[bool] = None


class ApplyPromoRequest(BaseModel):
    code: Optional[str] = None


class VerifyOrderPaymentRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: str
    order_id: int


class CancelOrderRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=255)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    note: Optional[str] = None
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[datetime] = None


class OrderUser(BaseModel):
    id: int
    full_name: str
    email: str

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    user_id: int
    items: list[dict]
    shipping_address: dict
    payment_method: str
    payment_status: str
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    order_status: str
    status_history: list[dict] = []
    items_total: float
    shipping_cost: float
    discount: float
    coupon_code: Optional[str] = None
    total_amount: float
    notes: Optional[str] = None
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancel_reason: Optional[str] = None
    created_at: datetime
    user: Optional[OrderUser] = None

    class Config:
        from_attributes = True
