# storefront/catalog_service/schemas.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SortBy(str, Enum):
    PRICE_HIGH = "PRICE_HIGH"
    PRICE_LOW = "PRICE_LOW"


# Схема для товара (Product)
class ProductSchema(BaseModel):
    id: str
    title: str
    brand: Optional[str] = None
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = Field(None, alias="imageUrl")
    category_id: Optional[str] = Field(None, alias="categoryId")
    rating: Optional[float] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class ProductListResponse(BaseModel):
    product: List[ProductSchema]


class ProductResponse(BaseModel):
    product: ProductSchema
