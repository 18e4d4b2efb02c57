from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.driven_adapter.model.booking_model import BookingModel
from src.service.seating.driven_adapter.repo.booking_mapper import to_entity


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def list_confirmed_by_user(self, *, user_id: str) -> List[Booking]:
        result = await self.session.execute(
            select(BookingModel)
            .where(
                BookingModel.user_id == user_id,
                BookingModel.status == BookingStatus.CONFIRMED.value,
            )
            .order_by(BookingModel.created_at)
        )
        return [to_entity(db_booking) for db_booking in result.scalars().all()]

    @Logger.io
    async def list_by_user(
        self,
        *,
        user_id: str,
        status: Optional[BookingStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Booking], int]:
        conditions = [BookingModel.user_id == user_id]
        if status is not None:
            conditions.append(BookingModel.status == status.value)

        total = await self.session.scalar(
            select(func.count()).select_from(BookingModel).where(*conditions)
        )
        result = await self.session.execute(
            select(BookingModel)
            .where(*conditions)
            .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            .limit(limit)
            .offset(offset)
        )
        bookings = [to_entity(db_booking) for db_booking in result.scalars().all()]
        return bookings, total or 0

    @Logger.io
    async def get_by_id_and_user(self, *, booking_id: UUID, user_id: str) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(
                BookingModel.id == booking_id, BookingModel.user_id == user_id
            )
        )
        db_booking = result.scalar_one_or_none()
        return to_entity(db_booking) if db_booking else None
