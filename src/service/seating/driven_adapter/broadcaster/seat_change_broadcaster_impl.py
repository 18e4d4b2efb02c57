"""
Seat Change Broadcaster Implementation

Driven Adapter implementing ISeatChangeBroadcaster over an ITopicPublisher
(in-memory hub or Redis pub/sub, chosen by BROADCAST_BACKEND).

Delivery is best effort: a failing topic is logged and skipped, the remaining topics
and events are still attempted, and nothing is raised to the committed transaction.
"""

from collections.abc import Iterable

from src.platform.event.i_topic_publisher import ITopicPublisher
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster
from src.service.seating.domain.domain_event.seat_events import (
    SeatBookedEvent,
    SeatChangeEvent,
    SeatReleasedEvent,
    SeatsResetEvent,
)


class SeatChangeBroadcasterImpl(ISeatChangeBroadcaster):
    def __init__(self, *, publisher: ITopicPublisher) -> None:
        self._publisher = publisher

    async def _emit(self, event: SeatChangeEvent) -> None:
        payload = event.to_payload()
        for topic in event.topics:
            try:
                await self._publisher.publish(topic, payload)
            except Exception as e:
                Logger.base.error(
                    f'❌ [BROADCAST] Failed to publish {event.event_type} to {topic}: {e}'
                )

    async def seats_booked(self, *, seat_ids: Iterable[str], user_id: str) -> None:
        for seat_id in seat_ids:
            await self._emit(SeatBookedEvent(seat_id=seat_id, user_id=user_id))

    async def seats_released(self, *, seat_ids: Iterable[str], user_id: str) -> None:
        for seat_id in seat_ids:
            await self._emit(SeatReleasedEvent(seat_id=seat_id, user_id=user_id))

    async def seats_reset(self, *, user_id: str, cancelled_count: int) -> None:
        await self._emit(SeatsResetEvent(user_id=user_id, cancelled_count=cancelled_count))
