"""
Seating Service - Main Application
Library roster, seat bookings, entrance scans and admin release.

Run:
    uvicorn src.service.seating.main:app --reload
"""

from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client


SERVICE_NAME = 'seating-service'


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Seating Service] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seating Service] Dependency injection wired')

    if settings.STORE_BACKEND == 'kvrocks':
        tracing.instrument_redis()
        # Fail-fast: no silent fallback to the memory store
        await kvrocks_client.initialize()
    else:
        Logger.base.info('💾 [Seating Service] Using in-memory seat store')

    setup()

    async with anyio.create_task_group() as task_group:
        sweeper = container.expiry_sweeper()
        task_group.start_soon(sweeper.start_polling)  # type: ignore[arg-type]

        Logger.base.info('✅ [Seating Service] Startup complete')
        yield

        Logger.base.info('🛑 [Seating Service] Shutting down...')
        task_group.cancel_scope.cancel()

    await kvrocks_client.disconnect()
    tracing.shutdown()
    container.unwire()
    cleanup()
    Logger.base.info('👋 [Seating Service] Shutdown complete')


app = create_app(lifespan=lifespan, service_name=SERVICE_NAME)
