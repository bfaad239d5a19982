# storefront/db/models.py
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.db.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Модель пользователя
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    number = Column(String, nullable=False)  # Номер телефона

    orders = relationship("Order", back_populates="user")


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True)
    title = Column(String, index=True, nullable=False)
    brand = Column(String, nullable=True)
    description = Column(String, nullable=True)
    price = Column(Float, nullable=False)
    image_url = Column(String, nullable=True)
    category_id = Column(String, index=True, nullable=True)
    rating = Column(Float, default=0)


# Одна корзина на username; при оформлении заказа очищается, но не удаляется
class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    items = relationship("CartItem", back_populates="cart", order_by="CartItem.id")


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),)

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), nullable=False)
    product_id = Column(String, nullable=False)
    title = Column(String, nullable=True)
    price = Column(Float, nullable=False)
    image_url = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    cart = relationship("Cart", back_populates="items")


# Модель заказов
class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    order_id = Column(String, index=True, nullable=False)  # id заказа в Razorpay
    payment_id = Column(String, nullable=False)
    items = Column(JSON, nullable=False)  # снимок корзины на момент оплаты
    total_amount = Column(Float, nullable=False)
    status = Column(String, nullable=False, default="PAID")
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="orders")
