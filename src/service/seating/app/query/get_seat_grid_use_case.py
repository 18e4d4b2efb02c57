from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.seat_grid import SeatGrid


class GetSeatGridUseCase:
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
    async def execute(self, *, user_id: Optional[str]) -> SeatGrid:
        """Grid as seen by user_id; anonymous callers have no bookings in scope"""
        if not user_id:
            return SeatGrid.empty()

        async with self.uow_factory() as uow:
            bookings = await uow.booking_query_repo.list_confirmed_by_user(user_id=user_id)
        return SeatGrid.derive(bookings)
