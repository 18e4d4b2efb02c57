from typing import List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


class ListBookingsUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow_factory.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        status: Optional[BookingStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Booking], int]:
        async with self.uow_factory() as uow:
            bookings, total = await uow.booking_query_repo.list_by_user(
                user_id=user_id, status=status, limit=limit, offset=offset
            )

        Logger.base.info(f'📋 [LIST] user={user_id}: {len(bookings)} of {total} bookings')
        return bookings, total
