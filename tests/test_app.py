import pytest
from fastapi.testclient import TestClient

from storefront.config import ConfigurationError, Settings
from storefront.main import create_app
from storefront.payment_service.gateway import get_gateway
from tests.conftest import signup


class BrokenGateway:
    async def create_order(self, amount, currency, receipt):
        raise RuntimeError("gateway exploded")


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "storefront running"}


def test_unknown_route_uses_error_body(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error_msg": "Not Found"}


def test_demo_products_seeded_once(settings):
    app = create_app(settings)
    with TestClient(app):
        pass
    with TestClient(app) as client:
        token = client.post("/signup", json={"username": "u", "password": "p", "number": "1"}).json()["jwt_token"]
        products = client.get("/products", headers={"Authorization": f"Bearer {token}"}).json()["product"]
    assert len(products) == 5


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://shop:pw@db:5432/shop")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("TOKEN_EXPIRE_DAYS", "7")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://shop.example")
    monkeypatch.setenv("SEED_DEMO_PRODUCTS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.database_url == "postgresql+asyncpg://shop:pw@db:5432/shop"
    assert settings.jwt_secret == "s3cret"
    assert settings.token_expire_days == 7
    assert settings.cors_origins == ["http://localhost:3000", "https://shop.example"]
    assert settings.seed_demo_products is True
    assert settings.log_level == "DEBUG"
    assert settings.payment_currency == "INR"


def test_unexpected_errors_use_error_body(app):
    app.dependency_overrides[get_gateway] = lambda: BrokenGateway()
    with TestClient(app, raise_server_exceptions=False) as client:
        headers = {"Authorization": f"Bearer {signup(client)}"}
        response = client.post("/create-order", json={"amount": 10}, headers=headers)
    assert response.status_code == 500
    assert response.json() == {"error_msg": "Internal Server Error"}


@pytest.mark.parametrize("secrets", [
    {},
    {"jwt_secret": "test_jwt_secret"},
    {"razorpay_key_secret": "test_key_secret"},
    {"jwt_secret": "your_secret_key", "razorpay_key_secret": "test_key_secret"},
    {"jwt_secret": "test_jwt_secret", "razorpay_key_secret": "change-me"},
])
def test_startup_refuses_missing_or_placeholder_secrets(tmp_path, secrets):
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", upload_dir=str(tmp_path), **secrets)
    with pytest.raises(ConfigurationError):
        with TestClient(create_app(settings)):
            pass


def test_check_secrets_names_what_is_missing():
    with pytest.raises(ConfigurationError, match="RAZORPAY_KEY_SECRET"):
        Settings(jwt_secret="test_jwt_secret").check_secrets()
    Settings(jwt_secret="test_jwt_secret", razorpay_key_secret="test_key_secret").check_secrets()
