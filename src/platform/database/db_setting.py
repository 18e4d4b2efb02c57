"""
SQLAlchemy async engine and session management

Engines are bound to the event loop that created them; when the running loop changes
(test clients, reloads) a fresh engine is built instead of reusing pooled connections
attached to a dead loop.
"""

import asyncio
from typing import Any, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the engine and session factory for the configured database URL."""

    def __init__(self, *, url: str | None = None) -> None:
        self._url = url or settings.DATABASE_URL_ASYNC
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def url(self) -> str:
        return self._url

    def _engine_options(self) -> dict[str, Any]:
        if self._url.startswith('sqlite'):
            return {}
        return {
            'pool_size': settings.DB_POOL_SIZE,
            'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
            'pool_timeout': settings.DB_POOL_TIMEOUT,
            'pool_recycle': settings.DB_POOL_RECYCLE,
            'pool_pre_ping': True,
        }

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._engine is None or (current_loop is not None and self._loop is not current_loop):
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, rebuilding engine')
            self._engine = create_async_engine(self._url, echo=False, **self._engine_options())
            self._session_maker = None
            self._loop = current_loop
            Logger.base.info(f'🔗 [DB] Engine created for {self._engine.url.render_as_string()}')
        return self._engine

    @property
    def session(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
        return self._session_maker

    async def create_tables(self) -> None:
        # Register models on Base.metadata
        from src.service.seating.driven_adapter.model import booking_model  # noqa: F401

        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            self._loop = None
