# storefront/payment_service/gateway.py
import hashlib
import hmac
import logging
from typing import Optional

import httpx
from fastapi import Request

from storefront.config import Settings
from storefront.errors import GatewayError, SignatureMismatch

logger = logging.getLogger(__name__)


def sign_payment(order_id: str, payment_id: str, secret: str) -> str:
    """HMAC-SHA256 от ``"<order_id>|<payment_id>"`` в hex."""
    message = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str) -> None:
    expected = sign_payment(order_id, payment_id, secret)
    if not hmac.compare_digest(expected.encode(), signature.encode()):
        logger.warning("Signature mismatch for order %s / payment %s", order_id, payment_id)
        raise SignatureMismatch("Invalid signature")


class RazorpayClient:
    """Асинхронный клиент Razorpay Orders API."""

    def __init__(self, key_id: str, key_secret: str, base_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        return cls(
            settings.razorpay_key_id,
            settings.razorpay_key_secret,
            settings.razorpay_api_url,
            timeout=settings.gateway_timeout,
            transport=transport,
        )

    async def create_order(self, amount: int, currency: str, receipt: str) -> dict:
        """Создает заказ (payment intent). ``amount`` в минимальных единицах (пайсах)."""
        payload = {"amount": amount, "currency": currency, "receipt": receipt}
        try:
            response = await self._client.post("/orders", json=payload)
            response.raise_for_status()
            order = response.json()
            if not isinstance(order, dict):
                raise ValueError(f"unexpected order payload: {order!r}")
            return order
        except (httpx.HTTPError, ValueError) as e:
            logger.exception("Razorpay order creation failed: %s", e)
            raise GatewayError("Order creation failed") from e

    async def aclose(self):
        await self._client.aclose()


def get_gateway(request: Request) -> RazorpayClient:
    return request.app.state.gateway
