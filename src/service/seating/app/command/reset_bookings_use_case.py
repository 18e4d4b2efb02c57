from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster


class ResetBookingsUseCase:
    """Cancel every confirmed booking of a user in one transaction; returns the count."""

    def __init__(
        self, *, uow_factory: UnitOfWorkFactory, broadcaster: ISeatChangeBroadcaster
    ) -> None:
        self.uow_factory = uow_factory
        self.broadcaster = broadcaster

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow_factory.provider]),
        broadcaster: ISeatChangeBroadcaster = Depends(
            Provide[Container.seat_change_broadcaster]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory, broadcaster=broadcaster)

    @Logger.io
    async def execute(self, *, user_id: str) -> int:
        async with self.uow_factory() as uow:
            cancelled_count = await uow.booking_command_repo.cancel_all_confirmed_by_user(
                user_id=user_id
            )
            await uow.commit()

        Logger.base.info(f'🧹 [RESET] user={user_id} cancelled {cancelled_count} bookings')
        try:
            await self.broadcaster.seats_reset(user_id=user_id, cancelled_count=cancelled_count)
        except Exception as e:
            Logger.base.warning(f'⚠️ [RESET] seats-reset broadcast failed: {e}')
        return cancelled_count
