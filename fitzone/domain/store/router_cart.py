"""Cart router"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...shared.responses import success
from .cart_service import CartService
from .schemas import CartAdd, CartResponse, CartUpdate

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    """Dependency injection for CartService"""
    return CartService(db)


@router.get("")
async def get_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return success(CartResponse.from_cart(service.get_cart(current_user)))


@router.get("/count")
async def get_cart_count(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return success({"count": service.count(current_user)})


@router.post("/add")
async def add_to_cart(
    data: CartAdd,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    cart = service.add_item(data, current_user)
    return success(CartResponse.from_cart(cart), message="Item added to cart")


@router.put("/update")
async def update_cart_item(
    data: CartUpdate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return success(CartResponse.from_cart(service.update_item(data, current_user)))


@router.delete("/remove/{item_id}")
async def remove_from_cart(
    item_id: int,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    cart = service.remove_item(item_id, current_user)
    return success(CartResponse.from_cart(cart), message="Item removed from cart")


@router.delete("/clear")
async def clear_cart(
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    return success(CartResponse.from_cart(service.clear(current_user)), message="Cart cleared")


__all__ = ["router"]
