"""Product router - storefront catalogue and admin inventory"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import admin_required, get_current_user
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .product_service import ProductService
from .schemas import (
    ProductCategory,
    ProductCreate,
    ProductDetail,
    ProductSummary,
    ProductUpdate,
    ReviewCreate,
    ReviewResponse,
    StockUpdate,
)

router = APIRouter(prefix="/api/products", tags=["Products"])


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency injection for ProductService"""
    return ProductService(db)


def summaries(products) -> list[ProductSummary]:
    return [ProductSummary.model_validate(p) for p in products]


# ============================================================================
# ADMIN (registered before the catch-all slug route)
# ============================================================================


@router.get("/admin/all")
async def get_all_products_admin(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = None,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    products, page_info = service.admin_list(page, limit, category, search, is_active)
    return success(summaries(products), pagination=page_info)


@router.get("/admin/low-stock")
async def get_low_stock_products(
    threshold: int = Query(10, ge=0),
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    return success(summaries(service.low_stock(threshold)))


@router.post("", status_code=201)
async def create_product(
    data: ProductCreate,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    return success(ProductSummary.model_validate(service.create_product(data)))


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    data: ProductUpdate,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    return success(ProductSummary.model_validate(service.update_product(product_id, data)))


@router.patch("/{product_id}/toggle-status")
async def toggle_product_status(
    product_id: int,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    product = service.toggle_status(product_id)
    state = "activated" if product.is_active else "deactivated"
    return success(ProductSummary.model_validate(product), message=f"Product {state} successfully")


@router.patch("/{product_id}/stock")
async def update_product_stock(
    product_id: int,
    data: StockUpdate,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    product = service.update_stock(product_id, data.stock)
    return success(ProductSummary.model_validate(product), message="Stock updated successfully")


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    _: User = Depends(admin_required),
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return success(message="Product deleted successfully")


# ============================================================================
# STOREFRONT
# ============================================================================


@router.get("")
async def get_products(
    category: Optional[ProductCategory] = None,
    subcategory: Optional[str] = None,
    brand: Optional[str] = Query(None, description="Comma separated brand names"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    search: Optional[str] = None,
    featured: bool = False,
    in_stock: bool = False,
    sort: Optional[str] = Query(None, pattern="^(price_low|price_high|newest|popular|rating)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
):
    brands = [b.strip() for b in brand.split(",") if b.strip()] if brand else None
    products, page_info = service.list_products(
        page,
        limit,
        category=category,
        subcategory=subcategory,
        brands=brands,
        min_price=min_price,
        max_price=max_price,
        search=search,
        featured=featured,
        in_stock=in_stock,
        sort=sort,
    )
    return success(summaries(products), pagination=page_info)


@router.get("/featured")
async def get_featured_products(
    limit: int = Query(8, ge=1, le=50),
    service: ProductService = Depends(get_product_service),
):
    return success(summaries(service.featured(limit)))


@router.get("/categories")
async def get_categories(service: ProductService = Depends(get_product_service)):
    return success(service.categories())


@router.get("/brands")
async def get_brands(
    category: Optional[str] = None,
    service: ProductService = Depends(get_product_service),
):
    return success(service.brands(category))


@router.get("/search")
async def search_products(
    q: Optional[str] = None,
    limit: int = Query(10, ge=1, le=50),
    service: ProductService = Depends(get_product_service),
):
    return success(summaries(service.search(q, limit)))


@router.get("/category/{category}")
async def get_products_by_category(
    category: str,
    limit: int = Query(12, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
):
    return success(summaries(service.by_category(category, limit)))


@router.get("/id/{product_id}")
async def get_product_by_id(product_id: int, service: ProductService = Depends(get_product_service)):
    return success(ProductDetail.model_validate(service.get_product(product_id)))


@router.post("/{product_id}/reviews", status_code=201)
async def add_product_review(
    product_id: int,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ProductService = Depends(get_product_service),
):
    review = service.add_review(product_id, data, current_user)
    return success(ReviewResponse.model_validate(review), message="Review added successfully")


@router.get("/{slug}")
async def get_product_by_slug(slug: str, service: ProductService = Depends(get_product_service)):
    return success(ProductDetail.model_validate(service.get_by_slug(slug)))


__all__ = ["router"]
