# storefront/cart_service/main.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth_service.auth_utils import get_current_user
from storefront.auth_service.schemas import TokenUser
from storefront.cart_service.functions import (
    add_product_to_cart,
    clear_user_cart,
    decrement_quantity,
    get_cart_items,
    increment_quantity,
    remove_product_from_cart,
)
from storefront.cart_service.schemas import CartResponse, LineItem, MessageResponse
from storefront.db.database import get_db

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("", response_model=MessageResponse)
async def add_to_cart(item: LineItem, user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await add_product_to_cart(db, user.username, item)
    return {"message": "Item added to cart"}


@router.get("", response_model=CartResponse)
async def get_cart(user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    items = await get_cart_items(db, user.username)
    return {"items": items}


@router.delete("", response_model=MessageResponse)
async def clear_cart(user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await clear_user_cart(db, user.username)
    return {"message": "All cart items removed"}


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_from_cart(product_id: str, user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await remove_product_from_cart(db, user.username, product_id)
    return {"message": "Item removed"}


@router.put("/increment/{product_id}", response_model=MessageResponse)
async def increment_item(product_id: str, user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await increment_quantity(db, user.username, product_id)
    return {"message": "Quantity increased"}


@router.put("/decrement/{product_id}", response_model=MessageResponse)
async def decrement_item(product_id: str, user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    await decrement_quantity(db, user.username, product_id)
    return {"message": "Quantity decreased"}
