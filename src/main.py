"""
Production FastAPI Application

Seating API, WebSocket seat channel and, with BROADCAST_BACKEND=redis, the Redis
pub/sub relay feeding the local topic hub. SEAT_LOCK_BACKEND=redis shares the booking
guard across workers.
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
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Seating] Starting up...')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Seating] Dependency injection wired')

    database = container.database()
    await database.create_tables()

    relay_redis = settings.BROADCAST_BACKEND == 'redis'
    use_redis = relay_redis or settings.SEAT_LOCK_BACKEND == 'redis'
    if use_redis:
        # Fail fast when Redis is unreachable
        await container.redis_client().initialize()

    async with anyio.create_task_group() as tg:
        if relay_redis:
            await container.redis_topic_relay().start(task_group=tg)

        Logger.base.info(
            f'✅ [Seating] Ready (broadcast: {settings.BROADCAST_BACKEND}, '
            f'seat lock: {settings.SEAT_LOCK_BACKEND})'
        )
        yield

        Logger.base.info('🛑 [Seating] Shutting down...')
        tg.cancel_scope.cancel()

    if use_redis:
        await container.redis_client().disconnect()

    await database.dispose()
    Logger.base.info('🗄️  [Seating] Database engine disposed')

    container.unwire()
    Logger.base.info('👋 [Seating] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
