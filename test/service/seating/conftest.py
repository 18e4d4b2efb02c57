"""
Seating test fixtures

In-memory unit of work: each unit works on a private copy of the store and writes back
only the bookings it touched, on commit. Reads yield to the event loop so concurrent use
cases interleave the way they would against a real database.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Set, Tuple
from unittest.mock import AsyncMock
from uuid import UUID

import anyio
import attrs
import pytest

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.state.keyed_lock import KeyedLock
from src.service.seating.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.seating.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster
from src.service.seating.domain.entity.booking_entity import Booking, new_booking_id
from src.service.seating.domain.enum.booking_status import BookingStatus


class InMemoryBookingStore:
    def __init__(self) -> None:
        self.bookings: Dict[UUID, Booking] = {}
        self.commits = 0

    def seed(
        self,
        *,
        user_id: str,
        seat_ids: List[str],
        status: BookingStatus = BookingStatus.CONFIRMED,
        total_price: Decimal = Decimal('0.00'),
    ) -> Booking:
        created_at = datetime.now(timezone.utc) + timedelta(microseconds=len(self.bookings))
        booking = Booking(
            id=new_booking_id(),
            user_id=user_id,
            seat_ids=list(seat_ids),
            total_price=total_price,
            status=status,
            created_at=created_at,
            updated_at=created_at,
            cancelled_at=created_at if status == BookingStatus.CANCELLED else None,
        )
        self.bookings[booking.id] = booking
        return booking

    def confirmed_seats(self, user_id: str) -> List[str]:
        return sorted(
            seat_id
            for booking in self.bookings.values()
            if booking.user_id == user_id and booking.is_confirmed
            for seat_id in booking.seat_ids
        )


class FakeBookingCommandRepo(IBookingCommandRepo):
    def __init__(self, uow: 'FakeUnitOfWork') -> None:
        self.uow = uow

    async def create(self, *, booking: Booking) -> Booking:
        self.uow.write(booking)
        return booking

    async def get_for_update_by_id_and_user(
        self, *, booking_id: UUID, user_id: str
    ) -> Optional[Booking]:
        await anyio.sleep(0)
        booking = self.uow.pending.get(booking_id)
        return booking if booking and booking.user_id == user_id else None

    async def update(self, *, booking: Booking) -> Booking:
        self.uow.write(booking)
        return booking

    async def cancel_all_confirmed_by_user(self, *, user_id: str) -> int:
        count = 0
        for booking in list(self.uow.pending.values()):
            if booking.user_id == user_id and booking.is_confirmed:
                self.uow.write(booking.cancel())
                count += 1
        return count


class FakeBookingQueryRepo(IBookingQueryRepo):
    def __init__(self, uow: 'FakeUnitOfWork') -> None:
        self.uow = uow

    async def list_confirmed_by_user(self, *, user_id: str) -> List[Booking]:
        await anyio.sleep(0)
        return [b for b in self.uow.pending.values() if b.user_id == user_id and b.is_confirmed]

    async def list_by_user(
        self,
        *,
        user_id: str,
        status: Optional[BookingStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Booking], int]:
        matching = [
            b
            for b in self.uow.pending.values()
            if b.user_id == user_id and (status is None or b.status == status)
        ]
        matching.sort(key=lambda b: b.created_at or datetime.min, reverse=True)
        return matching[offset : offset + limit], len(matching)

    async def get_by_id_and_user(self, *, booking_id: UUID, user_id: str) -> Optional[Booking]:
        booking = self.uow.pending.get(booking_id)
        return booking if booking and booking.user_id == user_id else None


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: InMemoryBookingStore) -> None:
        self.store = store
        self.pending: Dict[UUID, Booking] = {}
        self.dirty: Set[UUID] = set()

    async def __aenter__(self) -> 'FakeUnitOfWork':
        self.pending = dict(self.store.bookings)
        self.dirty = set()
        self.booking_command_repo = FakeBookingCommandRepo(self)
        self.booking_query_repo = FakeBookingQueryRepo(self)
        await super().__aenter__()
        return self

    def write(self, booking: Booking) -> None:
        self.pending[booking.id] = attrs.evolve(booking)
        self.dirty.add(booking.id)

    async def _commit(self) -> None:
        for booking_id in self.dirty:
            self.store.bookings[booking_id] = self.pending[booking_id]
        self.dirty.clear()
        self.store.commits += 1

    async def rollback(self) -> None:
        self.dirty.clear()


@pytest.fixture
def booking_store() -> InMemoryBookingStore:
    return InMemoryBookingStore()


@pytest.fixture
def uow_factory(booking_store: InMemoryBookingStore) -> Callable[[], FakeUnitOfWork]:
    return lambda: FakeUnitOfWork(booking_store)


@pytest.fixture
def seat_lock() -> KeyedLock:
    return KeyedLock(timeout=1.0)


@pytest.fixture
def broadcaster() -> AsyncMock:
    return AsyncMock(spec=ISeatChangeBroadcaster)
