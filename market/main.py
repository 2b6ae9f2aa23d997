# market/main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from market.core.config import Settings, get_settings
from market.core.db import get_engine
from market.core.errors import (
    MarketError,
    market_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from market.routers.comments import router as comments_router
from market.routers.health import router as health_router
from market.routers.topics import router as topics_router
from market.services.uploads import ImageStore
from market.utils.logger import get_logger

logger = get_logger(__name__)

routers = [
    health_router,
    topics_router,
    comments_router,
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        settings = get_settings()
        overrides = {}
    else:
        # 명시적으로 받은 설정을 의존성(get_db, get_image_store)에도 적용
        overrides = {get_settings: lambda: settings}

    store = ImageStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.ensure_dir()
        engine = get_engine(settings.DATABASE_URL)
        logger.info("### DB backend: %s", engine.url.get_backend_name())
        logger.info("### uploads: %s -> %s", settings.UPLOAD_URL_PREFIX, store.directory.resolve())
        yield

    app = FastAPI(title="Market API", lifespan=lifespan)
    app.dependency_overrides.update(overrides)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MarketError, market_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for r in routers:
        app.include_router(r)

    app.mount(
        store.url_prefix,
        StaticFiles(directory=str(store.directory), check_dir=False),
        name="uploads",
    )

    for r in app.routes:
        logger.debug("    %s %s", getattr(r, "methods", None), getattr(r, "path", None))

    return app


app = create_app()
