"""
Seat Change Events

Published after a booking transaction commits. Each event knows the topics it belongs on
and renders the wire envelope {"event": <type>, "data": {...}}.
"""

from typing import Any, ClassVar

import attrs

from src.service.seating.domain.seat_grid import SeatGrid


GRID_TOPIC = 'grid'


def seat_topic(seat_id: str) -> str:
    return f'seat:{seat_id}'


@attrs.define(frozen=True)
class SeatBookedEvent:
    event_type: ClassVar[str] = 'seat-booked'

    seat_id: str
    user_id: str

    @property
    def topics(self) -> tuple[str, ...]:
        return (seat_topic(self.seat_id), GRID_TOPIC)

    def to_payload(self) -> dict[str, Any]:
        return {'event': self.event_type, 'data': {'seat_id': self.seat_id, 'user_id': self.user_id}}


@attrs.define(frozen=True)
class SeatReleasedEvent:
    event_type: ClassVar[str] = 'seat-released'

    seat_id: str
    user_id: str

    @property
    def topics(self) -> tuple[str, ...]:
        return (seat_topic(self.seat_id), GRID_TOPIC)

    def to_payload(self) -> dict[str, Any]:
        return {'event': self.event_type, 'data': {'seat_id': self.seat_id, 'user_id': self.user_id}}


@attrs.define(frozen=True)
class SeatsResetEvent:
    """Summary of a reset: one event regardless of how many bookings were cancelled"""

    event_type: ClassVar[str] = 'seats-reset'

    user_id: str
    cancelled_count: int

    @property
    def topics(self) -> tuple[str, ...]:
        return (GRID_TOPIC,)

    def to_payload(self) -> dict[str, Any]:
        return {
            'event': self.event_type,
            'data': {'user_id': self.user_id, 'cancelled_count': self.cancelled_count},
        }


@attrs.define(frozen=True)
class GridUpdatedEvent:
    event_type: ClassVar[str] = 'grid-updated'

    grid: SeatGrid

    @property
    def topics(self) -> tuple[str, ...]:
        return (GRID_TOPIC,)

    def to_payload(self) -> dict[str, Any]:
        return {'event': self.event_type, 'data': {'grid': self.grid.to_payload()}}


SeatChangeEvent = SeatBookedEvent | SeatReleasedEvent | SeatsResetEvent | GridUpdatedEvent
