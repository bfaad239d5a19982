import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app
from storefront.payment_service.gateway import get_gateway

KEY_SECRET = "test_key_secret"


class FakeGateway:
    def __init__(self):
        self.calls = []

    async def create_order(self, amount, currency, receipt):
        self.calls.append({"amount": amount, "currency": currency, "receipt": receipt})
        return {
            "id": "order_test_%d" % len(self.calls),
            "entity": "order",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
        }


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test_jwt_secret",
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=KEY_SECRET,
        upload_dir=str(tmp_path),
        seed_demo_products=True,
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(settings, gateway):
    app = create_app(settings)
    app.dependency_overrides[get_gateway] = lambda: gateway
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def signup(client, username="alice", password="wonderland", number="9876543210"):
    response = client.post("/signup", json={"username": username, "password": password, "number": number})
    assert response.status_code == 200, response.text
    return response.json()["jwt_token"]


@pytest.fixture
def auth_headers(client):
    return {"Authorization": f"Bearer {signup(client)}"}
