"""
Redis Pub/Sub Topic Publisher

Cross-process transport: every topic maps to a Redis channel with the same name under a
common prefix, e.g. 'seating:grid' or 'seating:seat:3-5'.
"""

from typing import Any

import orjson

from src.platform.logging.loguru_io import Logger
from src.platform.state.redis_client import RedisClient


CHANNEL_PREFIX = 'seating:'


def channel_for(topic: str) -> str:
    return f'{CHANNEL_PREFIX}{topic}'


def topic_for(channel: str | bytes) -> str:
    if isinstance(channel, bytes):
        channel = channel.decode()
    return channel.removeprefix(CHANNEL_PREFIX)


class RedisTopicPublisher:
    def __init__(self, *, redis_client: RedisClient) -> None:
        self._redis_client = redis_client

    async def publish(self, topic: str, event: dict[str, Any]) -> None:
        channel = channel_for(topic)
        receivers = await self._redis_client.get_client().publish(channel, orjson.dumps(event))
        Logger.base.debug(
            f'📤 [REDIS] Published {event.get("event")} to {channel} (receivers={receivers})'
        )
