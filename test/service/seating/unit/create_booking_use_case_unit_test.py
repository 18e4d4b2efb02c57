"""
Unit tests for CreateBookingUseCase

Flow under test:
1. Request validation before the store is touched
2. Availability re-checked against the user's confirmed bookings under the seat guard
   (in-process, or Redis-backed when several workers share the store)
3. Persist + commit, then seat-booked broadcast per seat
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import anyio
import pytest

from src.platform.exception.exceptions import (
    BusyError,
    ConflictError,
    DomainError,
    SeatUnavailableError,
)
from src.platform.state.keyed_lock import KeyedLock
from src.platform.state.redis_keyed_lock import RedisKeyedLock
from src.service.seating.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


class TestCreateBooking:
    @pytest.fixture
    def use_case(self, uow_factory, seat_lock, broadcaster) -> CreateBookingUseCase:
        return CreateBookingUseCase(
            uow_factory=uow_factory, seat_lock=seat_lock, broadcaster=broadcaster
        )

    @pytest.mark.asyncio
    async def test_books_seats_and_broadcasts(
        self, use_case: CreateBookingUseCase, booking_store, broadcaster: AsyncMock
    ) -> None:
        booking = await use_case.execute(user_id='alice', seat_ids=['0-0', '3-4', '7-9'])

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.total_price == Decimal('2250.00')
        assert booking_store.bookings == {booking.id: booking}
        assert booking_store.commits == 1
        broadcaster.seats_booked.assert_awaited_once_with(
            seat_ids=['0-0', '3-4', '7-9'], user_id='alice'
        )

    @pytest.mark.asyncio
    async def test_broadcast_failure_keeps_the_committed_booking(
        self, use_case: CreateBookingUseCase, booking_store, broadcaster: AsyncMock
    ) -> None:
        broadcaster.seats_booked.side_effect = RuntimeError('hub down')

        booking = await use_case.execute(user_id='alice', seat_ids=['3-5'])

        assert booking_store.bookings == {booking.id: booking}
        assert booking_store.commits == 1
        broadcaster.seats_booked.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_booked_seat_is_a_conflict_and_persists_nothing(
        self, use_case: CreateBookingUseCase, booking_store, broadcaster: AsyncMock
    ) -> None:
        booking_store.seed(user_id='alice', seat_ids=['3-5'])

        with pytest.raises(SeatUnavailableError, match='Seat 3-5 is already booked'):
            await use_case.execute(user_id='alice', seat_ids=['3-4', '3-5'])

        assert len(booking_store.bookings) == 1
        assert booking_store.commits == 0
        broadcaster.seats_booked.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_users_bookings_are_out_of_scope(
        self, use_case: CreateBookingUseCase, booking_store
    ) -> None:
        booking_store.seed(user_id='bob', seat_ids=['3-5'])

        booking = await use_case.execute(user_id='alice', seat_ids=['3-5'])

        assert booking.user_id == 'alice'
        assert booking_store.confirmed_seats('alice') == ['3-5']
        assert booking_store.confirmed_seats('bob') == ['3-5']

    @pytest.mark.asyncio
    async def test_cancelled_seat_can_be_booked_again(
        self, use_case: CreateBookingUseCase, booking_store
    ) -> None:
        booking_store.seed(user_id='alice', seat_ids=['3-5'], status=BookingStatus.CANCELLED)

        booking = await use_case.execute(user_id='alice', seat_ids=['3-5'])

        assert booking.seat_ids == ['3-5']

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'seat_ids',
        [[], [f'1-{c}' for c in range(9)], ['3-5', '3-5'], ['03-5'], ['8-0']],
    )
    async def test_invalid_requests_never_touch_the_store(
        self, use_case: CreateBookingUseCase, booking_store, seat_ids: list[str]
    ) -> None:
        with pytest.raises(DomainError):
            await use_case.execute(user_id='alice', seat_ids=seat_ids)

        assert booking_store.bookings == {}

    @pytest.mark.asyncio
    async def test_concurrent_creates_for_same_seat_yield_one_booking(
        self, use_case: CreateBookingUseCase, booking_store
    ) -> None:
        outcomes: list[Booking | ConflictError] = []

        async def attempt() -> None:
            try:
                outcomes.append(await use_case.execute(user_id='alice', seat_ids=['3-5']))
            except ConflictError as e:
                outcomes.append(e)

        async with anyio.create_task_group() as tg:
            tg.start_soon(attempt)
            tg.start_soon(attempt)

        assert sum(isinstance(o, Booking) for o in outcomes) == 1
        assert sum(isinstance(o, ConflictError) for o in outcomes) == 1
        assert booking_store.confirmed_seats('alice') == ['3-5']

    @pytest.mark.asyncio
    async def test_creates_on_separate_workers_share_the_redis_guard(
        self, uow_factory, broadcaster, booking_store, fake_redis_client
    ) -> None:
        workers = [
            CreateBookingUseCase(
                uow_factory=uow_factory,
                seat_lock=RedisKeyedLock(
                    redis_client=fake_redis_client, timeout=1.0, retry_interval=0.01
                ),
                broadcaster=broadcaster,
            )
            for _ in range(2)
        ]
        outcomes: list[Booking | ConflictError] = []

        async def attempt(worker: CreateBookingUseCase) -> None:
            try:
                outcomes.append(await worker.execute(user_id='alice', seat_ids=['3-5']))
            except ConflictError as e:
                outcomes.append(e)

        async with anyio.create_task_group() as tg:
            for worker in workers:
                tg.start_soon(attempt, worker)

        assert sum(isinstance(o, Booking) for o in outcomes) == 1
        assert sum(isinstance(o, ConflictError) for o in outcomes) == 1
        assert booking_store.confirmed_seats('alice') == ['3-5']

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_overlapping_seats(
        self, use_case: CreateBookingUseCase, booking_store
    ) -> None:
        outcomes: list[Booking | ConflictError] = []

        async def attempt(seat_ids: list[str]) -> None:
            try:
                outcomes.append(await use_case.execute(user_id='alice', seat_ids=seat_ids))
            except ConflictError as e:
                outcomes.append(e)

        async with anyio.create_task_group() as tg:
            tg.start_soon(attempt, ['2-2', '2-3'])
            tg.start_soon(attempt, ['2-3', '2-4'])

        assert sum(isinstance(o, Booking) for o in outcomes) == 1
        assert len(booking_store.bookings) == 1

    @pytest.mark.asyncio
    async def test_guard_timeout_is_busy(self, uow_factory, broadcaster, booking_store) -> None:
        seat_lock = KeyedLock(timeout=0.1)
        use_case = CreateBookingUseCase(
            uow_factory=uow_factory, seat_lock=seat_lock, broadcaster=broadcaster
        )
        held = anyio.Event()
        release = anyio.Event()

        async def hold_seat() -> None:
            async with seat_lock.hold(['3-5']):
                held.set()
                await release.wait()

        async with anyio.create_task_group() as tg:
            tg.start_soon(hold_seat)
            await held.wait()

            try:
                with pytest.raises(BusyError) as exc_info:
                    await use_case.execute(user_id='alice', seat_ids=['3-4', '3-5'])
            finally:
                release.set()

        assert exc_info.value.retryable is True
        assert exc_info.value.status_code == 503
        assert booking_store.bookings == {}
