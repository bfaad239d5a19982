# storefront/payment_service/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from storefront.cart_service.schemas import LineItem


class CreateOrderRequest(BaseModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False)  # в рупиях


# Razorpay checkout отдает razorpay_* поля; camelCase тоже принимаем
class PaymentProof(BaseModel):
    order_id: str = Field(..., validation_alias=AliasChoices("razorpay_order_id", "gatewayOrderId"))
    payment_id: str = Field(..., validation_alias=AliasChoices("razorpay_payment_id", "gatewayPaymentId"))
    signature: str = Field(..., validation_alias=AliasChoices("razorpay_signature", "signature"))


class SaveOrderRequest(PaymentProof):
    cart_list: List[LineItem] = Field(..., validation_alias=AliasChoices("cartList", "cart_list"))
    total_amount: float = Field(..., ge=0, allow_inf_nan=False, validation_alias=AliasChoices("totalAmount", "total_amount"))


class OrderSchema(BaseModel):
    id: int
    user_id: int = Field(..., alias="userId")
    order_id: str = Field(..., alias="orderId")
    payment_id: str = Field(..., alias="paymentId")
    items: List[LineItem]
    total_amount: float = Field(..., alias="totalAmount")
    status: str
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True
