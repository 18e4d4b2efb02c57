"""
In-memory Topic Hub

Process-local pub/sub used by the WebSocket endpoint. Each subscriber owns a bounded
anyio memory stream; a full stream drops the event instead of blocking the publisher.
"""

from typing import Any, Dict, List

from anyio import BrokenResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger


class InMemoryTopicHub:
    """
    In-memory pub/sub keyed by topic

    - topic -> list of (send_stream, receive_stream)
    - Drop policy: send_nowait raising WouldBlock drops the event for that subscriber
    - Empty topic lists are removed on unsubscribe
    """

    def __init__(self, *, max_buffer_size: int = 64) -> None:
        self._max_buffer_size = max_buffer_size
        self._subscribers: Dict[
            str,
            List[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]],
        ] = {}

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    async def subscribe(self, topic: str) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self._max_buffer_size
        )
        self._subscribers.setdefault(topic, []).append((send_stream, receive_stream))
        Logger.base.debug(
            f'📡 [HUB] Subscribed to {topic} (total subscribers: {self.subscriber_count(topic)})'
        )
        return receive_stream

    async def publish(self, topic: str, event: dict[str, Any]) -> None:
        subscribers = self._subscribers.get(topic)
        if not subscribers:
            return

        delivered = 0
        dropped = 0
        for send_stream, _ in list(subscribers):
            try:
                send_stream.send_nowait(event)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [HUB] Stream full on {topic}, dropping event {event.get("event")}'
                )
            except BrokenResourceError:
                # Receiver closed without unsubscribing
                dropped += 1

        Logger.base.debug(f'📡 [HUB] {topic}: delivered={delivered}, dropped={dropped}')

    async def unsubscribe(self, topic: str, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(topic)
        if not subscribers:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                break

        if not subscribers:
            del self._subscribers[topic]
            Logger.base.debug(f'📡 [HUB] Cleaned up empty topic {topic}')
