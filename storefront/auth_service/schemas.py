# storefront/auth_service/schemas.py
from typing import Optional

from pydantic import BaseModel


class TokenUser(BaseModel):
    """Личность из bearer-токена."""
    username: str
    id: int


# Пустые поля проверяет ручка /signup
class SignupRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    number: Optional[str] = None

    class Config:
        # телефон часто присылают числом
        coerce_numbers_to_str = True


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    jwt_token: str


# Схема пользователя (без хэша пароля)
class UserSchema(BaseModel):
    id: int
    username: str
    number: str

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    user: UserSchema
