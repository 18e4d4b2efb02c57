from typing import Optional

from redis.asyncio import ConnectionPool as AsyncConnectionPool, Redis as AsyncRedis

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class RedisClient:
    """
    Async Redis client with a shared connection pool.

    Usage:
        await redis_client.initialize()  # In startup
        client = redis_client.get_client()  # In handlers
    """

    def __init__(self, *, url: str | None = None) -> None:
        self._url = url or settings.REDIS_URL
        self._client: Optional[AsyncRedis] = None

    async def initialize(self) -> AsyncRedis:
        """Initialize connection pool (idempotent, fail-fast)"""
        if self._client is not None:
            return self._client

        pool = AsyncConnectionPool.from_url(
            self._url,
            socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            socket_keepalive=True,
        )
        client = AsyncRedis.from_pool(pool)
        await client.ping()
        self._client = client
        Logger.base.info(f'📡 [REDIS] Connected to {self._url}')
        return client

    def get_client(self) -> AsyncRedis:
        if self._client is None:
            raise RuntimeError('Redis client not initialized. Call initialize() first.')
        return self._client

    def create_pubsub_client(self) -> AsyncRedis:
        # Dedicated connection without read timeout; a pub/sub listener blocks indefinitely
        return AsyncRedis.from_url(
            self._url, socket_connect_timeout=settings.REDIS_SOCKET_CONNECT_TIMEOUT
        )

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            Logger.base.info('📡 [REDIS] Disconnected')
