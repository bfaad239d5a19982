# storefront/cart_service/functions.py
"""
Операции с корзиной.

Каждое изменение количества делается одним SQL-выражением (upsert или
условный UPDATE), поэтому параллельные запросы одного пользователя
не теряют обновления.
"""
import logging

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.cart_service.schemas import LineItem
from storefront.db.models import Cart, CartItem, utcnow
from storefront.errors import NotFoundError

logger = logging.getLogger(__name__)


def _insert(db: AsyncSession, model):
    # INSERT ... ON CONFLICT у каждого диалекта свой
    if db.bind.dialect.name == "postgresql":
        return postgresql.insert(model)
    return sqlite.insert(model)


def _cart_id(username: str):
    return select(Cart.id).filter(Cart.username == username).scalar_subquery()


async def _touch_cart(db: AsyncSession, username: str):
    await db.execute(
        update(Cart)
        .where(Cart.username == username)
        .values(updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )


async def get_cart_items(db: AsyncSession, username: str):
    """Товары из корзины пользователя в порядке добавления (пустой список, если корзины нет)."""
    result = await db.execute(
        select(CartItem)
        .join(Cart, CartItem.cart_id == Cart.id)
        .filter(Cart.username == username)
        .order_by(CartItem.id)
    )
    return result.scalars().all()


# Добавление товара в корзину
async def add_product_to_cart(db: AsyncSession, username: str, item: LineItem):
    now = utcnow()
    cart_stmt = _insert(db, Cart).values(username=username, updated_at=now)
    cart_stmt = cart_stmt.on_conflict_do_update(
        index_elements=["username"], set_={"updated_at": now}
    ).returning(Cart.id)
    cart_id = (await db.execute(cart_stmt)).scalar_one()

    item_stmt = _insert(db, CartItem).values(
        cart_id=cart_id,
        product_id=item.product_id,
        title=item.title,
        price=item.price,
        image_url=item.image_url,
        quantity=item.quantity,
    )
    # Товар уже в корзине -> увеличиваем количество
    item_stmt = item_stmt.on_conflict_do_update(
        index_elements=["cart_id", "product_id"],
        set_={"quantity": CartItem.__table__.c.quantity + item_stmt.excluded.quantity},
    )
    await db.execute(item_stmt)
    await db.commit()
    logger.debug("add_product_to_cart user=%s product=%s qty=%s", username, item.product_id, item.quantity)


# Удаление товара из корзины
async def remove_product_from_cart(db: AsyncSession, username: str, product_id: str):
    await db.execute(
        delete(CartItem)
        .where(CartItem.cart_id == _cart_id(username), CartItem.product_id == product_id)
        .execution_options(synchronize_session=False)
    )
    await _touch_cart(db, username)
    await db.commit()


async def clear_user_cart(db: AsyncSession, username: str, commit: bool = True):
    """Очистка корзины пользователя. Сама корзина остается."""
    await db.execute(
        delete(CartItem)
        .where(CartItem.cart_id == _cart_id(username))
        .execution_options(synchronize_session=False)
    )
    await _touch_cart(db, username)
    if commit:
        await db.commit()


async def increment_quantity(db: AsyncSession, username: str, product_id: str):
    result = await db.execute(
        update(CartItem)
        .where(CartItem.cart_id == _cart_id(username), CartItem.product_id == product_id)
        .values(quantity=CartItem.quantity + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFoundError("Item not found in cart")
    await _touch_cart(db, username)
    await db.commit()


async def decrement_quantity(db: AsyncSession, username: str, product_id: str):
    # количество не опускается ниже 1, удаление делается отдельно
    result = await db.execute(
        update(CartItem)
        .where(
            CartItem.cart_id == _cart_id(username),
            CartItem.product_id == product_id,
            CartItem.quantity > 1,
        )
        .values(quantity=CartItem.quantity - 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        exists = await db.execute(
            select(CartItem.id).filter(CartItem.cart_id == _cart_id(username), CartItem.product_id == product_id)
        )
        if exists.scalar_one_or_none() is None:
            await db.rollback()
            raise NotFoundError("Item not found in cart")
    else:
        await _touch_cart(db, username)
    await db.commit()
