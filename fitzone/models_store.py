from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

PRODUCT_CATEGORIES = ("supplements", "clothing", "equipment", "accessories")
ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled")
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    short_description = Column(String(300), default="")
    price = Column(Float, nullable=False)
    compare_price = Column(Float, default=0)  # original price before sale
    category = Column(String(30), nullable=False, index=True)
    subcategory = Column(String(50), default="")
    brand = Column(String(100), default="FitZone")
    images = Column(JSON, default=list)  # [{url, public_id}]
    thumbnail = Column(String(500), default="")
    stock = Column(Integer, default=0, nullable=False)
    sku = Column(String(100), nullable=True)
    sizes = Column(JSON, default=list)
    colors = Column(JSON, default=list)
    flavors = Column(JSON, default=list)
    weight = Column(String(50), default="")
    tags = Column(JSON, default=list)
    features = Column(JSON, default=list)
    specifications = Column(JSON, default=dict)
    rating_average = Column(Float, default=0)
    rating_count = Column(Integer, default=0)
    is_featured = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True, nullable=False)
    sold_count = Column(Integer, default=0)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    reviews = relationship(
        "ProductReview", back_populates="product", cascade="all, delete-orphan",
        order_by="ProductReview.id.desc()",
    )

    @property
    def discount_percentage(self) -> int:
        if self.compare_price and self.compare_price > self.price:
            return round((self.compare_price - self.price) / self.compare_price * 100)
        return 0

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ProductReview(Base):
    __tablename__ = "product_reviews"
    __table_args__ = (UniqueConstraint("product_id", "user_id", name="uq_review_product_user"),)

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    product = relationship("Product", back_populates="reviews")


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id"
    )

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> float:
        return sum(item.price * item.quantity for item in self.items)


class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)  # price snapshot at time of adding
    image = Column(String(500), default="")
    quantity = Column(Integer, default=1, nullable=False)
    size = Column(String(30), nullable=True)
    color = Column(String(30), nullable=True)
    flavor = Column(String(50), nullable=True)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String(40), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    items = Column(JSON, nullable=False)  # snapshot of cart lines
    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(String(20), nullable=False)  # razorpay, cod
    payment_status = Column(String(20), default="pending", nullable=False)
    razorpay_order_id = Column(String(100), nullable=True, index=True)
    razorpay_payment_id = Column(String(100), nullable=True)
    razorpay_signature = Column(String(255), nullable=True)
    order_status = Column(String(20), default="pending", nullable=False)
    status_history = Column(JSON, default=list)  # [{status, note, timestamp}]
    items_total = Column(Float, nullable=False)
    shipping_cost = Column(Float, default=0)
    discount = Column(Float, default=0)
    coupon_code = Column(String(30), nullable=True)
    total_amount = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
    tracking_number = Column(String(100), nullable=True)
    estimated_delivery = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    cancel_reason = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User")
