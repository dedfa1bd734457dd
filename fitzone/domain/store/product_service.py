"""Product service - storefront catalogue, reviews and admin inventory"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import CATEGORIES_KEY, cache
from ...models import User
from ...models_store import Product, ProductReview
from ...security_utils import sanitize_text
from ...shared.responses import paginate_query
from .repository import ProductRepository, product_slug
from .schemas import ProductCreate, ProductUpdate, ReviewCreate

logger = logging.getLogger(__name__)

CATEGORY_INFO = {
    "supplements": {
        "name": "Supplements",
        "description": "Protein, Pre-workout, Vitamins & more",
        "icon": "💊",
        "image": "https://images.unsplash.com/photo-1593095948071-474c5cc2989d?w=400",
    },
    "clothing": {
        "name": "Clothing",
        "description": "T-shirts, Shorts, Shoes & Activewear",
        "icon": "👕",
        "image": "https://images.unsplash.com/photo-1556906781-9a412961c28c?w=400",
    },
    "equipment": {
        "name": "Equipment",
        "description": "Dumbbells, Bands, Mats & Machines",
        "icon": "🏋️",
        "image": "https://images.unsplash.com/photo-1534438327276-14e5300c3a48?w=400",
    },
    "accessories": {
        "name": "Accessories",
        "description": "Gloves, Shakers, Belts & Bags",
        "icon": "🧤",
        "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
    },
}
CATEGORIES_TTL = 600


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository()

    # Storefront

    def list_products(self, page: int = 1, limit: int = 12, **filters) -> tuple[list[Product], dict]:
        return paginate_query(self.repo.filtered(self.db, **filters), page, limit)

    def featured(self, limit: int = 8) -> list[Product]:
        return self.repo.filtered(self.db, featured=True).limit(limit).all()

    def by_category(self, category: str, limit: int = 12) -> list[Product]:
        return self.repo.filtered(self.db, category=category).limit(limit).all()

    def search(self, q: Optional[str], limit: int = 10) -> list[Product]:
        if not q:
            return []
        return (
            self.repo.active(self.db)
            .filter(self.repo.search_filter(q, Product.name, Product.tags, Product.brand))
            .limit(limit)
            .all()
        )

    def categories(self) -> list[dict]:
        return cache.get_or_load(CATEGORIES_KEY, self._category_stats, ttl=CATEGORIES_TTL)

    def _category_stats(self) -> list[dict]:
        return [
            {
                **CATEGORY_INFO.get(category, {"name": category.title()}),
                "slug": category,
                "count": count,
                "min_price": min_price,
                "max_price": max_price,
            }
            for category, count, min_price, max_price in self.repo.category_stats(self.db)
        ]

    def brands(self, category: Optional[str] = None) -> list[dict]:
        return [
            {"name": brand, "count": count}
            for brand, count in self.repo.brand_counts(self.db, category)
        ]

    def get_by_slug(self, slug: str) -> Product:
        product = self.repo.get_active_by_slug(self.db, slug)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def get_product(self, product_id: int) -> Product:
        product = self.repo.get_by_id(self.db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def add_review(self, product_id: int, data: ReviewCreate, user: User) -> ProductReview:
        product = self.get_product(product_id)
        if any(review.user_id == user.id for review in product.reviews):
            raise HTTPException(status_code=400, detail="You have already reviewed this product")

        review = ProductReview(
            product_id=product.id,
            user_id=user.id,
            name=user.full_name,
            rating=data.rating,
            comment=sanitize_text(data.comment),
        )
        product.reviews.append(review)
        ratings = [r.rating for r in product.reviews]
        product.rating_average = round(sum(ratings) / len(ratings), 2)
        product.rating_count = len(ratings)
        self.db.commit()
        self.db.refresh(review)
        return review

    # Admin

    def admin_list(
        self,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> tuple[list[Product], dict]:
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        if is_active is not None:
            query = query.filter(Product.is_active.is_(is_active))
        if search:
            query = query.filter(self.repo.search_filter(search, Product.name, Product.sku))
        return paginate_query(query.order_by(Product.created_at.desc(), Product.id.desc()), page, limit)

    def low_stock(self, threshold: int = 10) -> list[Product]:
        return self.repo.low_stock(self.db, threshold)

    def create_product(self, data: ProductCreate) -> Product:
        fields = data.model_dump(exclude_none=True)
        fields["slug"] = fields.get("slug") or product_slug(data.name)
        if not fields.get("thumbnail") and fields.get("images"):
            fields["thumbnail"] = fields["images"][0]["url"]
        product = Product(created_at=datetime.utcnow(), **fields)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        cache.invalidate(CATEGORIES_KEY)
        logger.info(f"✅ Product created: {product.name} ({product.slug})")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        for key, value in data.model_dump(exclude_none=True).items():
            setattr(product, key, value)
        if not product.thumbnail and product.images:
            product.thumbnail = product.images[0]["url"]
        self.db.commit()
        self.db.refresh(product)
        cache.invalidate(CATEGORIES_KEY)
        return product

    def toggle_status(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        product.is_active = not product.is_active
        self.db.commit()
        self.db.refresh(product)
        cache.invalidate(CATEGORIES_KEY)
        return product

    def update_stock(self, product_id: int, stock: Optional[int]) -> Product:
        if stock is None or stock < 0:
            raise HTTPException(status_code=400, detail="Please provide a valid stock value")
        product = self.get_product(product_id)
        product.stock = stock
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.db.delete(product)
        self.db.commit()
        cache.invalidate(CATEGORIES_KEY)
        logger.info(f"🗑️ Product {product_id} deleted")
