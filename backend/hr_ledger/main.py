from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from hr_ledger.api.health import router as health_router
from hr_ledger.api.router import api_router
from hr_ledger.config import get_settings
from hr_ledger.db import dispose_engine, init_db
from hr_ledger.exceptions import setup_exception_handlers
from hr_ledger.middleware import setup_middleware
from hr_ledger.services.notification import get_dispatcher

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from hr_ledger.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.debug else logging.WARNING)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    if settings.create_tables_on_startup:
        await init_db()
    if not settings.smtp_configured:
        logger.warning("SMTP not configured; notifications will only be logged")
    dispatcher = get_dispatcher()
    dispatcher.start()
    yield
    logger.info("Shutting down %s", settings.app_name)
    await dispatcher.stop()
    await dispose_engine()


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()
