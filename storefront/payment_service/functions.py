# storefront/payment_service/functions.py
import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.auth_service.functions import get_user_by_username
from storefront.cart_service.functions import clear_user_cart
from storefront.db.models import Order
from storefront.errors import NotFoundError
from storefront.payment_service.gateway import RazorpayClient, verify_payment_signature
from storefront.payment_service.schemas import SaveOrderRequest

logger = logging.getLogger(__name__)

ORDER_STATUS_PAID = "PAID"


def to_minor_units(amount: float) -> int:
    # Razorpay принимает сумму в пайсах
    return int(round(amount * 100))


async def create_payment_intent(gateway: RazorpayClient, amount: float, currency: str) -> dict:
    options = {
        "amount": to_minor_units(amount),
        "currency": currency,
        "receipt": f"receipt_{int(time.time() * 1000)}",
    }
    order = await gateway.create_order(**options)
    logger.info("Created payment intent %s for %s %s", order.get("id"), options["amount"], currency)
    return order


async def save_paid_order(db: AsyncSession, username: str, body: SaveOrderRequest, secret: str) -> Order:
    """
    Сохраняет оплаченный заказ и очищает корзину пользователя.

    Подпись шлюза проверяется здесь повторно: заказ сохраняется только для
    платежа, который действительно подписал шлюз. Вставка заказа и очистка
    корзины коммитятся вместе.
    """
    verify_payment_signature(body.order_id, body.payment_id, body.signature, secret)

    user = await get_user_by_username(db, username)
    if not user:
        raise NotFoundError("User not found")

    new_order = Order(
        user_id=user.id,
        order_id=body.order_id,
        payment_id=body.payment_id,
        items=[item.model_dump(by_alias=True) for item in body.cart_list],
        total_amount=body.total_amount,
        status=ORDER_STATUS_PAID,
    )
    db.add(new_order)
    await clear_user_cart(db, username, commit=False)
    await db.commit()
    await db.refresh(new_order)
    logger.info("Saved order %s (payment %s) for user %s", body.order_id, body.payment_id, username)
    return new_order


# Получение всех заказов пользователя
async def get_user_orders(db: AsyncSession, username: str):
    user = await get_user_by_username(db, username)
    if not user:
        raise NotFoundError("User not found")

    result = await db.execute(select(Order).filter(Order.user_id == user.id).order_by(Order.id))
    return result.scalars().all()
