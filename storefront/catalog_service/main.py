# storefront/catalog_service/main.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.auth_service.auth_utils import get_current_user
from storefront.auth_service.schemas import TokenUser
from storefront.catalog_service.functions import get_all_products, get_product_by_id
from storefront.catalog_service.schemas import ProductListResponse, ProductResponse, SortBy
from storefront.db.database import get_db
from storefront.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=ProductListResponse)
async def read_products(
    sort_by: Optional[SortBy] = None,
    category: Optional[str] = None,
    title_search: Optional[str] = None,
    rating: Optional[float] = Query(default=None, ge=0),
    user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    products = await get_all_products(db, category=category, search=title_search, min_rating=rating, sort_by=sort_by)
    logger.debug("read_products category=%s search=%s rating=%s -> %d", category, title_search, rating, len(products))
    return {"product": products}


@router.get("/products/{product_id}", response_model=ProductResponse)
async def read_product(product_id: str, user: TokenUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    product = await get_product_by_id(db, product_id)
    if not product:
        logger.info("Product not found for id: %s", product_id)
        raise NotFoundError("Product not found")
    return {"product": product}
