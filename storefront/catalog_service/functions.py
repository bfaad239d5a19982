# storefront/catalog_service/functions.py
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.catalog_service.schemas import SortBy
from storefront.db.models import Product


# Получение продуктов с фильтрами и сортировкой
async def get_all_products(
    db: AsyncSession,
    category: Optional[str] = None,
    search: Optional[str] = None,
    min_rating: Optional[float] = None,
    sort_by: Optional[SortBy] = None,
):
    query = select(Product)
    if category:
        query = query.filter(Product.category_id == category)
    if search:
        query = query.filter(Product.title.icontains(search, autoescape=True))
    if min_rating is not None:
        query = query.filter(Product.rating >= min_rating)

    if sort_by == SortBy.PRICE_HIGH:
        query = query.order_by(Product.price.desc())
    elif sort_by == SortBy.PRICE_LOW:
        query = query.order_by(Product.price.asc())

    result = await db.execute(query)
    return result.scalars().all()


# Получение одного продукта
async def get_product_by_id(db: AsyncSession, product_id: str):
    result = await db.execute(select(Product).filter(Product.id == product_id))
    return result.scalar_one_or_none()
