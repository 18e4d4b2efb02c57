"""
Seat Channel WebSocket

Real-time seat changes over one WebSocket per client.

Client commands (JSON text frames):
    {"action": "join-grid"}                      -> grid-updated snapshot, then grid events
    {"action": "leave-grid"}
    {"action": "join-seat", "seat_id": "3-5"}    -> subscribed ack, then seat events
    {"action": "leave-seat", "seat_id": "3-5"}

Every event is sent as {"event": <type>, "data": {...}}. Bad commands get an error event
and the connection stays open.
"""

from typing import Any, Awaitable, Callable, Dict, Optional

import anyio
from anyio.abc import TaskGroup, TaskStatus
from anyio.streams.memory import MemoryObjectReceiveStream
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
import orjson

from src.platform.config.di import container
from src.platform.event.in_memory_topic_hub import InMemoryTopicHub
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.query.get_seat_grid_use_case import GetSeatGridUseCase
from src.service.seating.domain.domain_event.seat_events import (
    GRID_TOPIC,
    GridUpdatedEvent,
    seat_topic,
)
from src.service.seating.domain.value_object.seat_id import SeatId


router = APIRouter()


class SeatChannelSession:
    def __init__(
        self,
        *,
        websocket: WebSocket,
        hub: InMemoryTopicHub,
        grid_use_case: GetSeatGridUseCase,
        user_id: Optional[str],
    ) -> None:
        self.websocket = websocket
        self.hub = hub
        self.grid_use_case = grid_use_case
        self.user_id = user_id
        self._send_lock = anyio.Lock()
        self._subscriptions: Dict[
            str, tuple[MemoryObjectReceiveStream[dict], anyio.CancelScope]
        ] = {}
        self._handlers: Dict[str, Callable[[TaskGroup, dict[str, Any]], Awaitable[None]]] = {
            'join-grid': self._join_grid,
            'leave-grid': self._leave_grid,
            'join-seat': self._join_seat,
            'leave-seat': self._leave_seat,
        }

    async def send(self, event: dict[str, Any]) -> None:
        async with self._send_lock:
            await self.websocket.send_text(orjson.dumps(event).decode())

    async def send_error(self, detail: str) -> None:
        await self.send({'event': 'error', 'data': {'detail': detail}})

    async def run(self) -> None:
        try:
            async with anyio.create_task_group() as tg:
                await self._receive_loop(tg)
                tg.cancel_scope.cancel()
        finally:
            for topic in list(self._subscriptions):
                await self._unsubscribe(topic)

    async def _receive_loop(self, tg: TaskGroup) -> None:
        while True:
            try:
                raw = await self.websocket.receive_text()
            except WebSocketDisconnect:
                Logger.base.debug(f'🔌 [WS] Client disconnected (user={self.user_id})')
                return

            try:
                message = orjson.loads(raw)
            except orjson.JSONDecodeError:
                await self.send_error('Message must be valid JSON')
                continue
            if not isinstance(message, dict):
                await self.send_error('Message must be a JSON object')
                continue

            action = message.get('action')
            handler = self._handlers.get(action) if isinstance(action, str) else None
            if handler is None:
                await self.send_error(f'Unknown action: {action!r}')
                continue

            try:
                await handler(tg, message)
            except CustomBaseError as e:
                await self.send_error(e.message)

    async def _forward(
        self,
        stream: MemoryObjectReceiveStream[dict],
        *,
        task_status: TaskStatus[anyio.CancelScope] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        with anyio.CancelScope() as scope:
            task_status.started(scope)
            try:
                async for event in stream:
                    await self.send(event)
            except WebSocketDisconnect:
                Logger.base.debug(f'🔌 [WS] Dropped events for disconnected user={self.user_id}')

    async def _subscribe(
        self, tg: TaskGroup, topic: str, *, first_event: Optional[dict[str, Any]] = None
    ) -> None:
        stream = await self.hub.subscribe(topic)
        if first_event is not None:
            # Sent before the forwarder starts, so it precedes every queued change
            await self.send(first_event)
        scope = await tg.start(self._forward, stream)
        self._subscriptions[topic] = (stream, scope)
        Logger.base.debug(f'📡 [WS] user={self.user_id} joined {topic}')

    async def _unsubscribe(self, topic: str) -> bool:
        subscription = self._subscriptions.pop(topic, None)
        if subscription is None:
            return False
        stream, scope = subscription
        scope.cancel()
        await self.hub.unsubscribe(topic, stream)
        Logger.base.debug(f'📡 [WS] user={self.user_id} left {topic}')
        return True

    @staticmethod
    def _seat_topic_of(message: dict[str, Any]) -> str:
        return seat_topic(str(SeatId.parse_in_bounds(message.get('seat_id'))))

    async def _join_grid(self, tg: TaskGroup, message: dict[str, Any]) -> None:
        grid = await self.grid_use_case.execute(user_id=self.user_id)
        snapshot = GridUpdatedEvent(grid=grid).to_payload()
        if GRID_TOPIC in self._subscriptions:
            await self.send(snapshot)
        else:
            await self._subscribe(tg, GRID_TOPIC, first_event=snapshot)

    async def _leave_grid(self, tg: TaskGroup, message: dict[str, Any]) -> None:
        await self._unsubscribe(GRID_TOPIC)
        await self.send({'event': 'unsubscribed', 'data': {'topic': GRID_TOPIC}})

    async def _join_seat(self, tg: TaskGroup, message: dict[str, Any]) -> None:
        topic = self._seat_topic_of(message)
        if topic not in self._subscriptions:
            await self._subscribe(tg, topic)
        await self.send({'event': 'subscribed', 'data': {'topic': topic}})

    async def _leave_seat(self, tg: TaskGroup, message: dict[str, Any]) -> None:
        topic = self._seat_topic_of(message)
        await self._unsubscribe(topic)
        await self.send({'event': 'unsubscribed', 'data': {'topic': topic}})


@router.websocket('/ws/seats')
async def seat_channel(
    websocket: WebSocket,
    user_id: Optional[str] = Query(default=None),
    grid_use_case: GetSeatGridUseCase = Depends(GetSeatGridUseCase.depends),
) -> None:
    await websocket.accept()
    Logger.base.info(f'🔌 [WS] Client connected (user={user_id})')

    session = SeatChannelSession(
        websocket=websocket,
        hub=container.topic_hub(),
        grid_use_case=grid_use_case,
        user_id=(user_id or '').strip() or None,
    )
    await session.run()
