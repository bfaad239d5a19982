# storefront/main.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront.auth_service.main import router as auth_router
from storefront.cart_service.main import router as cart_router
from storefront.catalog_service.main import router as catalog_router
from storefront.config import Settings
from storefront.db.database import create_engine, create_session_factory
from storefront.db.init_db import init_db, seed_products
from storefront.errors import register_exception_handlers
from storefront.payment_service.gateway import RazorpayClient
from storefront.payment_service.main import router as payment_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Инициализация базы данных и клиента Razorpay
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        settings.check_secrets()
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.gateway = RazorpayClient.from_settings(settings)
        await init_db(engine)
        if settings.seed_demo_products:
            await seed_products(app.state.session_factory)
        logger.info("storefront started, database %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            await app.state.gateway.aclose()
            await engine.dispose()

    app = FastAPI(title="storefront", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Картинки товаров отдаются без авторизации
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(payment_router)

    @app.get("/")
    async def health_check():
        """Проверка, что сервис жив."""
        return {"status": "storefront running"}

    return app


app = create_app()
