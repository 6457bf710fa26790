"""
Production FastAPI Application

Startup wires the DI container, prepares the database engine and starts the
ticket delivery worker; shutdown drains nothing, queued mails are dropped.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.db_setting import create_db_and_tables, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Logger.base.info('🚀 [Box Office] Starting up...')

    tracing = TracingConfig(service_name='box-office')
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Box Office] Dependency injection wired')

    engine = get_engine()
    tracing.instrument_sqlalchemy(engine=engine)
    if settings.AUTO_CREATE_TABLES:
        await create_db_and_tables(engine)
        Logger.base.info('🗄️  [Box Office] Tables ensured')

    delivery_queue = container.ticket_delivery_queue()
    async with anyio.create_task_group() as tg:
        tg.start_soon(delivery_queue.run)
        Logger.base.info('✅ [Box Office] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Box Office] Shutting down...')
        await delivery_queue.close()
        tg.cancel_scope.cancel()

    await container.database().dispose()
    Logger.base.info('🗄️  [Box Office] Database engine disposed')

    tracing.shutdown()
    container.unwire()
    container.reset_singletons()

    Logger.base.info('👋 [Box Office] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
