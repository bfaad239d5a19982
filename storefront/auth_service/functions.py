# storefront/auth_service/functions.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.auth_service.auth_utils import hash_password
from storefront.db.models import User
from storefront.errors import ValidationError

logger = logging.getLogger(__name__)


async def get_user_by_username(db: AsyncSession, username: str):
    result = await db.execute(select(User).filter(User.username == username))
    return result.scalar_one_or_none()


# Функция для создания нового пользователя
async def create_user(db: AsyncSession, username: str, password: str, number: str) -> User:
    if await get_user_by_username(db, username):
        raise ValidationError("User already exists")

    db_user = User(username=username, hashed_password=hash_password(password), number=number)
    db.add(db_user)
    try:
        await db.commit()
    except IntegrityError:
        # параллельная регистрация с тем же username
        await db.rollback()
        raise ValidationError("User already exists")
    await db.refresh(db_user)
    logger.info("Registered user %s (id=%s)", username, db_user.id)
    return db_user
