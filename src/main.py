"""
TigerTix FastAPI Application

Single service hosting the admin, client, auth and booking assistant APIs.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [TigerTix] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [TigerTix] Dependency injection wired')

    # Schema initialization (create tables if absent)
    await create_db_and_tables()
    Logger.base.info('🗄️  [TigerTix] Database ready')

    Logger.base.info('✅ [TigerTix] Ready to serve requests')

    yield

    Logger.base.info('🛑 [TigerTix] Shutting down...')

    await dispose_engine()
    cleanup()
    container.unwire()

    Logger.base.info('👋 [TigerTix] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
