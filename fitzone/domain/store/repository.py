"""Store repository - product catalogue, carts and orders"""

import secrets
import string
import time
from datetime import datetime
from typing import Optional

from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session, joinedload

from ...models import slugify
from ...models_store import Cart, CartItem, Order, Product

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def product_slug(name: str) -> str:
    """slugified-name-<base36 ms timestamp>"""
    return f"{slugify(name)}-{to_base36(int(time.time() * 1000))}"


def generate_order_number() -> str:
    """FZ-<BASE36 ms timestamp>-<4 random base36 chars>"""
    timestamp = to_base36(int(time.time() * 1000)).upper()
    random_part = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(4)).upper()
    return f"FZ-{timestamp}-{random_part}"


class ProductRepository:
    SORTS = {
        "price_low": (Product.price.asc(),),
        "price_high": (Product.price.desc(),),
        "newest": (Product.created_at.desc(),),
        "popular": (Product.sold_count.desc(),),
        "rating": (Product.rating_average.desc(),),
    }

    @staticmethod
    def active(db: Session):
        return db.query(Product).filter(Product.is_active.is_(True))

    @staticmethod
    def search_filter(term: str, *columns):
        pattern = f"%{term.lower()}%"
        return or_(*(func.lower(cast(column, String)).like(pattern) for column in columns))

    @classmethod
    def filtered(
        cls,
        db: Session,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
        brands: Optional[list[str]] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        search: Optional[str] = None,
        featured: bool = False,
        in_stock: bool = False,
        sort: Optional[str] = None,
    ):
        query = cls.active(db)
        if category:
            query = query.filter(Product.category == category)
        if subcategory:
            query = query.filter(Product.subcategory == subcategory)
        if brands:
            query = query.filter(Product.brand.in_(brands))
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        if search:
            query = query.filter(
                cls.search_filter(search, Product.name, Product.description, Product.brand, Product.tags)
            )
        if featured:
            query = query.filter(Product.is_featured.is_(True))
        if in_stock:
            query = query.filter(Product.stock > 0)
        order = cls.SORTS.get(sort, (Product.created_at.desc(),))
        return query.order_by(*order, Product.id.desc())

    @staticmethod
    def get_by_id(db: Session, product_id: int) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_active_by_slug(db: Session, slug: str) -> Optional[Product]:
        return (
            db.query(Product)
            .options(joinedload(Product.reviews))
            .filter(Product.slug == slug, Product.is_active.is_(True))
            .first()
        )

    @staticmethod
    def category_stats(db: Session) -> list[tuple]:
        return (
            db.query(
                Product.category,
                func.count(Product.id),
                func.min(Product.price),
                func.max(Product.price),
            )
            .filter(Product.is_active.is_(True))
            .group_by(Product.category)
            .order_by(func.count(Product.id).desc())
            .all()
        )

    @staticmethod
    def brand_counts(db: Session, category: Optional[str] = None) -> list[tuple]:
        query = db.query(Product.brand, func.count(Product.id)).filter(
            Product.is_active.is_(True), Product.brand.isnot(None), Product.brand != ""
        )
        if category:
            query = query.filter(Product.category == category)
        return query.group_by(Product.brand).order_by(func.count(Product.id).desc()).all()

    @staticmethod
    def low_stock(db: Session, threshold: int) -> list[Product]:
        return db.query(Product).filter(Product.stock <= threshold).order_by(Product.stock).all()


class CartRepository:
    @staticmethod
    def get_for_user(db: Session, user_id: int) -> Optional[Cart]:
        return (
            db.query(Cart)
            .options(joinedload(Cart.items).joinedload(CartItem.product))
            .filter(Cart.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_or_create(db: Session, user_id: int) -> Cart:
        cart = CartRepository.get_for_user(db, user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            db.add(cart)
            db.commit()
            db.refresh(cart)
        return cart

    @staticmethod
    def clear(db: Session, user_id: int) -> None:
        cart = db.query(Cart).filter(Cart.user_id == user_id).first()
        if cart:
            cart.items.clear()


class OrderRepository:
    @staticmethod
    def get_by_id(db: Session, order_id: int) -> Optional[Order]:
        return db.query(Order).filter(Order.id == order_id).first()

    @staticmethod
    def count_for_user(db: Session, user_id: int) -> int:
        """Orders that count against first-order status (cancelled ones do not)"""
        return (
            db.query(func.count(Order.id))
            .filter(Order.user_id == user_id, Order.order_status != "cancelled")
            .scalar()
        )

    @staticmethod
    def for_user(db: Session, user_id: int, status: Optional[str] = None):
        query = db.query(Order).filter(Order.user_id == user_id)
        if status:
            query = query.filter(Order.order_status == status)
        return query.order_by(Order.created_at.desc(), Order.id.desc())

    @staticmethod
    def admin_query(
        db: Session,
        status: Optional[str] = None,
        payment_status: Optional[str] = None,
        search: Optional[str] = None,
    ):
        query = db.query(Order).options(joinedload(Order.user))
        if status:
            query = query.filter(Order.order_status == status)
        if payment_status:
            query = query.filter(Order.payment_status == payment_status)
        if search:
            # Shipping name/phone live in the JSON column; match on its text form
            query = query.filter(
                ProductRepository.search_filter(search, Order.order_number, Order.shipping_address)
            )
        return query.order_by(Order.created_at.desc(), Order.id.desc())

    @staticmethod
    def stats(db: Session, since: datetime) -> dict:
        paid_total = func.coalesce(func.sum(Order.total_amount), 0)
        return {
            "total_orders": db.query(func.count(Order.id)).scalar(),
            "today_orders": db.query(func.count(Order.id)).filter(Order.created_at >= since).scalar(),
            "pending_orders": db.query(func.count(Order.id))
            .filter(Order.order_status == "pending")
            .scalar(),
            "total_revenue": db.query(paid_total).filter(Order.payment_status == "paid").scalar(),
            "today_revenue": db.query(paid_total)
            .filter(Order.payment_status == "paid", Order.created_at >= since)
            .scalar(),
        }
