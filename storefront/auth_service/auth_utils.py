# storefront/auth_service/auth_utils.py
import hashlib
import hmac
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Header

from storefront.auth_service.schemas import TokenUser
from storefront.config import Settings
from storefront.db.database import get_settings
from storefront.errors import AuthError

PBKDF2_ITERATIONS = 260_000


def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    """Хэширует пароль (PBKDF2-SHA256 с солью). Формат: ``<salt hex>$<digest hex>``."""
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверяет пароль, сравнивая с хэшем."""
    try:
        salt_hex, _ = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    return hmac.compare_digest(hash_password(plain_password, salt), hashed_password)


def create_access_token(data: dict, settings: Settings) -> str:
    """Создает JWT токен с указанным временем истечения."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + timedelta(days=settings.token_expire_days)})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenUser:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")
    username = payload.get("username")
    user_id = payload.get("id")
    if not username or user_id is None:
        raise AuthError("Invalid token")
    return TokenUser(username=username, id=user_id)


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthError("No token provided", status_code=401)
    parts = authorization.split(" ")
    if len(parts) < 2 or not parts[1]:
        raise AuthError("Invalid token")
    return parts[1]


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> TokenUser:
    """Проверяет bearer-токен и возвращает пользователя из него."""
    return decode_access_token(bearer_token(authorization), settings)
