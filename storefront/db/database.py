# storefront/db/database.py
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from storefront.config import Settings

# Базовый класс для моделей
Base = declarative_base()


def create_engine(settings: Settings) -> AsyncEngine:
    # Настройка асинхронного движка
    return create_async_engine(settings.database_url, echo=settings.db_echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    # Асинхронная фабрика сессий
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Генератор сессий
async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
