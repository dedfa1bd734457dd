"""Cart service - one cart per user with price snapshots"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import User
from ...models_store import Cart, CartItem
from .repository import CartRepository, ProductRepository
from .schemas import CartAdd, CartUpdate

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepository()

    def get_cart(self, user: User) -> Cart:
        """User's cart, created on first access, minus lines whose product is gone or inactive"""
        cart = self.repo.get_or_create(self.db, user.id)
        stale = [item for item in cart.items if item.product is None or not item.product.is_active]
        if stale:
            for item in stale:
                cart.items.remove(item)
            self.db.commit()
            self.db.refresh(cart)
            logger.info(f"🧹 Dropped {len(stale)} unavailable item(s) from cart {cart.id}")
        return cart

    def count(self, user: User) -> int:
        cart = self.repo.get_for_user(self.db, user.id)
        return cart.total_items if cart else 0

    def add_item(self, data: CartAdd, user: User) -> Cart:
        product = ProductRepository.get_by_id(self.db, data.product_id)
        if not product or not product.is_active:
            raise HTTPException(status_code=404, detail="Product not found")
        if product.stock < data.quantity:
            raise HTTPException(status_code=400, detail="Insufficient stock")

        cart = self.repo.get_or_create(self.db, user.id)
        existing = next(
            (
                item
                for item in cart.items
                if item.product_id == product.id
                and item.size == data.size
                and item.color == data.color
                and item.flavor == data.flavor
            ),
            None,
        )
        if existing:
            quantity = existing.quantity + data.quantity
            if quantity > product.stock:
                raise HTTPException(status_code=400, detail="Cannot add more than available stock")
            existing.quantity = quantity
        else:
            images = product.images or []
            cart.items.append(
                CartItem(
                    product_id=product.id,
                    name=product.name,
                    price=product.price,
                    image=product.thumbnail or (images[0]["url"] if images else ""),
                    quantity=data.quantity,
                    size=data.size,
                    color=data.color,
                    flavor=data.flavor,
                )
            )
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def update_item(self, data: CartUpdate, user: User) -> Cart:
        cart = self.repo.get_for_user(self.db, user.id)
        if not cart:
            raise HTTPException(status_code=404, detail="Cart not found")

        item = next((i for i in cart.items if i.id == data.item_id), None)
        if not item:
            raise HTTPException(status_code=404, detail="Item not found in cart")

        if data.quantity <= 0:
            cart.items.remove(item)
        else:
            if item.product and data.quantity > item.product.stock:
                raise HTTPException(status_code=400, detail="Insufficient stock")
            item.quantity = data.quantity
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def remove_item(self, item_id: int, user: User) -> Cart:
        cart = self.repo.get_for_user(self.db, user.id)
        if not cart:
            raise HTTPException(status_code=404, detail="Cart not found")

        item = next((i for i in cart.items if i.id == item_id), None)
        if item:
            cart.items.remove(item)
            self.db.commit()
            self.db.refresh(cart)
        return cart

    def clear(self, user: User) -> Optional[Cart]:
        cart = self.repo.get_for_user(self.db, user.id)
        if cart:
            cart.items.clear()
            self.db.commit()
            self.db.refresh(cart)
        return cart
