# storefront/config.py
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Значения-заглушки из примеров конфигурации, с ними не стартуем
PLACEHOLDER_SECRETS = {"", "your_secret_key", "change-me"}


class ConfigurationError(RuntimeError):
    pass


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    database_url: str = "sqlite+aiosqlite:///./storefront.db"
    db_echo: bool = False

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 30

    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_api_url: str = "https://api.razorpay.com/v1"
    payment_currency: str = "INR"
    gateway_timeout: float = 10.0

    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    upload_dir: str = "uploads"
    seed_demo_products: bool = False
    log_level: str = "INFO"

    def check_secrets(self) -> None:
        """Падает, если JWT_SECRET или RAZORPAY_KEY_SECRET не заданы или остались заглушками."""
        missing = [
            name for name, value in (
                ("JWT_SECRET", self.jwt_secret),
                ("RAZORPAY_KEY_SECRET", self.razorpay_key_secret),
            )
            if value.strip() in PLACEHOLDER_SECRETS
        ]
        if missing:
            raise ConfigurationError(f"Secrets not configured: {', '.join(missing)}")

    @classmethod
    def from_env(cls) -> "Settings":
        """Собирает настройки из переменных окружения (и .env)."""
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            db_echo=_as_bool(os.getenv("DB_ECHO", "false")),
            jwt_secret=os.getenv("JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", defaults.jwt_algorithm),
            token_expire_days=int(os.getenv("TOKEN_EXPIRE_DAYS", defaults.token_expire_days)),
            razorpay_key_id=os.getenv("RAZORPAY_KEY_ID", defaults.razorpay_key_id),
            razorpay_key_secret=os.getenv("RAZORPAY_KEY_SECRET", defaults.razorpay_key_secret),
            razorpay_api_url=os.getenv("RAZORPAY_API_URL", defaults.razorpay_api_url),
            payment_currency=os.getenv("PAYMENT_CURRENCY", defaults.payment_currency),
            gateway_timeout=float(os.getenv("GATEWAY_TIMEOUT", defaults.gateway_timeout)),
            cors_origins=[o.strip() for o in origins.split(",")] if origins else defaults.cors_origins,
            upload_dir=os.getenv("UPLOAD_DIR", defaults.upload_dir),
            seed_demo_products=_as_bool(os.getenv("SEED_DEMO_PRODUCTS", "false")),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        )
