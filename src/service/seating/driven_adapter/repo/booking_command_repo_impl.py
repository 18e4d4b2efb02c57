from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.driven_adapter.model.booking_model import BookingModel
from src.service.seating.driven_adapter.repo.booking_mapper import to_entity


class BookingCommandRepoImpl(IBookingCommandRepo):
    """Writes on the unit of work's session; flushes, never commits."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            id=booking.id,
            user_id=booking.user_id,
            seat_ids=list(booking.seat_ids),
            total_price=booking.total_price,
            status=booking.status.value,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            cancelled_at=booking.cancelled_at,
        )
        self.session.add(db_booking)
        await self.session.flush()
        await self.session.refresh(db_booking)
        return to_entity(db_booking)

    @Logger.io
    async def get_for_update_by_id_and_user(
        self, *, booking_id: UUID, user_id: str
    ) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(BookingModel.id == booking_id, BookingModel.user_id == user_id)
            .with_for_update()
        )
        db_booking = result.scalar_one_or_none()
        return to_entity(db_booking) if db_booking else None

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        db_booking = await self.session.get(BookingModel, booking.id)
        if db_booking is None:
            raise ValueError(f'Booking {booking.id} does not exist')

        db_booking.status = booking.status.value
        db_booking.updated_at = booking.updated_at or datetime.now(timezone.utc)
        db_booking.cancelled_at = booking.cancelled_at
        await self.session.flush()
        await self.session.refresh(db_booking)
        return to_entity(db_booking)

    @Logger.io
    async def cancel_all_confirmed_by_user(self, *, user_id: str) -> int:
        now = datetime.now(timezone.utc)
        result = await self.session.execute(
            update(BookingModel)
            .where(
                BookingModel.user_id == user_id,
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .values(status=BookingStatus.CANCELLED.value, updated_at=now, cancelled_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
