"""
Redis Pub/Sub Topic Relay

Background task that pattern-subscribes to every seating channel and republishes the
events into the process-local hub, so WebSocket clients connected to any worker see
changes committed by any other worker.
"""

import anyio
from anyio.abc import TaskGroup
import orjson

from src.platform.event.in_memory_topic_hub import InMemoryTopicHub
from src.platform.event.redis_topic_publisher import CHANNEL_PREFIX, topic_for
from src.platform.logging.loguru_io import Logger
from src.platform.state.redis_client import RedisClient


class RedisTopicRelay:
    def __init__(
        self,
        *,
        redis_client: RedisClient,
        hub: InMemoryTopicHub,
        retry_delay: float = 1.0,
    ) -> None:
        self._redis_client = redis_client
        self._hub = hub
        self._retry_delay = retry_delay

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self._run)
        Logger.base.info(f'📡 [RELAY] Relaying {CHANNEL_PREFIX}* into the local hub')

    async def _run(self) -> None:
        while True:
            try:
                await self._listen()
            except anyio.get_cancelled_exc_class():
                raise
            except Exception as e:
                Logger.base.warning(
                    f'⚠️ [RELAY] Subscription lost: {e}; retrying in {self._retry_delay}s'
                )
                await anyio.sleep(self._retry_delay)

    async def _listen(self) -> None:
        client = self._redis_client.create_pubsub_client()
        pubsub = client.pubsub()
        try:
            await pubsub.psubscribe(f'{CHANNEL_PREFIX}*')
            async for message in pubsub.listen():
                if message.get('type') != 'pmessage':
                    continue
                await self.relay(channel=message['channel'], data=message['data'])
        finally:
            await pubsub.aclose()
            await client.aclose()

    async def relay(self, *, channel: str | bytes, data: str | bytes) -> None:
        try:
            event = orjson.loads(data)
        except orjson.JSONDecodeError:
            Logger.base.warning(f'⚠️ [RELAY] Dropping undecodable message on {channel!r}')
            return
        await self._hub.publish(topic_for(channel), event)
