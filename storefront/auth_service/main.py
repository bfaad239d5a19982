# storefront/auth_service/main.py
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth_service.auth_utils import create_access_token, decode_access_token, verify_password
from storefront.auth_service.functions import create_user, get_user_by_username
from storefront.auth_service.schemas import LoginRequest, ProfileResponse, SignupRequest, TokenResponse
from storefront.config import Settings
from storefront.db.database import get_db, get_settings
from storefront.errors import AuthError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=TokenResponse)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_settings)):
    if not body.username or not body.password or not body.number:
        raise ValidationError("All fields are required")
    user = await create_user(db, body.username, body.password, body.number)
    token = create_access_token({"username": user.username, "id": user.id}, settings)
    return {"jwt_token": token}


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_settings)):
    logger.debug("Login attempt for username: %s", body.username)
    user = await get_user_by_username(db, body.username)
    if not user:
        raise ValidationError("Invalid username")
    if not verify_password(body.password, user.hashed_password):
        logger.warning("Wrong password for username: %s", body.username)
        raise ValidationError("Invalid password")

    token = create_access_token({"username": user.username, "id": user.id}, settings)
    return {"jwt_token": token}


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(request: Request, db: AsyncSession = Depends(get_db), settings: Settings = Depends(get_settings)):
    """Профиль текущего пользователя. Токен разбирается здесь же, без общего auth gate."""
    auth_header = request.headers.get("authorization")
    if not auth_header:
        raise AuthError("No token provided", status_code=401)

    parts = auth_header.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    try:
        identity = decode_access_token(token, settings)
    except AuthError:
        raise AuthError("Invalid token", status_code=401)

    user = await get_user_by_username(db, identity.username)
    if not user:
        raise NotFoundError("User not found")
    return {"user": user}
