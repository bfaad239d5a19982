# storefront/db/init_db.py
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from storefront.db.database import Base
from storefront.db.models import Product

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "id": "1",
        "title": "Wide Bowknot Hat",
        "brand": "MAJIK",
        "description": "Straw sun hat with a wide brim and ribbon bow.",
        "price": 288.0,
        "image_url": "/uploads/bowknot-hat.png",
        "category_id": "2",
        "rating": 3.6,
    },
    {
        "id": "2",
        "title": "Embroidered Net Gown",
        "brand": "Manyavar",
        "description": "Floor-length net gown with thread embroidery.",
        "price": 62990.0,
        "image_url": "/uploads/net-gown.png",
        "category_id": "1",
        "rating": 3.2,
    },
    {
        "id": "3",
        "title": "Front Load Washing Machine",
        "brand": "LG",
        "description": "8 kg, 1400 rpm, inverter direct drive.",
        "price": 5000.0,
        "image_url": "/uploads/washing-machine.png",
        "category_id": "3",
        "rating": 4.5,
    },
    {
        "id": "4",
        "title": "Collider Black Dial Men's Watch",
        "brand": "Fossil",
        "description": "Analog watch with a stainless steel case.",
        "price": 14995.0,
        "image_url": "/uploads/collider-watch.png",
        "category_id": "4",
        "rating": 4.0,
    },
    {
        "id": "5",
        "title": "Wireless Noise Cancelling Headphones",
        "brand": "Sony",
        "description": "Over-ear headphones, 30 hours of battery.",
        "price": 24990.0,
        "image_url": "/uploads/headphones.png",
        "category_id": "3",
        "rating": 4.7,
    },
]


async def init_db(engine: AsyncEngine):
    async with engine.begin() as conn:
        # Создание всех таблиц
        await conn.run_sync(Base.metadata.create_all)


async def seed_products(session_factory: async_sessionmaker) -> int:
    """Заполняет пустой каталог демо-товарами. Возвращает число добавленных."""
    async with session_factory() as db:
        count = (await db.execute(select(func.count()).select_from(Product))).scalar_one()
        if count:
            return 0
        db.add_all([Product(**product) for product in DEMO_PRODUCTS])
        await db.commit()
    logger.info("Seeded %d demo products", len(DEMO_PRODUCTS))
    return len(DEMO_PRODUCTS)
