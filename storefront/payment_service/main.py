# storefront/payment_service/main.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth_service.auth_utils import get_current_user
from storefront.auth_service.schemas import TokenUser
from storefront.cart_service.schemas import MessageResponse
from storefront.config import Settings
from storefront.db.database import get_db, get_settings
from storefront.payment_service.functions import create_payment_intent, get_user_orders, save_paid_order
from storefront.payment_service.gateway import RazorpayClient, get_gateway, verify_payment_signature
from storefront.payment_service.schemas import CreateOrderRequest, OrderSchema, PaymentProof, SaveOrderRequest

router = APIRouter(tags=["payment"])


@router.post("/create-order")
async def create_order(
    body: CreateOrderRequest,
    user: TokenUser = Depends(get_current_user),
    gateway: RazorpayClient = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    """Создает заказ в Razorpay и возвращает его как есть."""
    return await create_payment_intent(gateway, body.amount, settings.payment_currency)


@router.post("/verify-payment", response_model=MessageResponse)
async def verify_payment(
    body: PaymentProof,
    user: TokenUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    verify_payment_signature(body.order_id, body.payment_id, body.signature, settings.razorpay_key_secret)
    return {"message": "Payment verified successfully"}


@router.post("/save-order")
async def save_order(
    body: SaveOrderRequest,
    user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    await save_paid_order(db, user.username, body, settings.razorpay_key_secret)
    return {"status": "success"}


@router.get("/orders", response_model=List[OrderSchema])
async def list_orders(user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await get_user_orders(db, user.username)
