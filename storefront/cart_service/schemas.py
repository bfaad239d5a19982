# storefront/cart_service/schemas.py
from typing import List, Optional

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    product_id: str = Field(..., alias="productId", min_length=1)
    title: Optional[str] = None
    price: float = Field(..., ge=0, allow_inf_nan=False)
    image_url: Optional[str] = Field(None, alias="imageUrl")
    quantity: int = Field(1, ge=1)

    class Config:
        from_attributes = True
        populate_by_name = True


class CartResponse(BaseModel):
    items: List[LineItem]


class MessageResponse(BaseModel):
    message: str
