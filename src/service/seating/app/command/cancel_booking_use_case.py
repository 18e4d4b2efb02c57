from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster
from src.service.seating.domain.entity.booking_entity import Booking


class CancelBookingUseCase:
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
    async def execute(self, *, booking_id: UUID, user_id: str) -> Booking:
        """
        Raises:
            NotFoundError: Booking missing or owned by someone else (same message for both)
            AlreadyCancelledError: Booking was cancelled before; nothing changes
        """
        async with self.uow_factory() as uow:
            booking = await uow.booking_command_repo.get_for_update_by_id_and_user(
                booking_id=booking_id, user_id=user_id
            )
            if booking is None:
                raise NotFoundError('Booking not found')

            cancelled = await uow.booking_command_repo.update(booking=booking.cancel())
            await uow.commit()

        Logger.base.info(f'🔓 [CANCEL] user={user_id} cancelled booking {booking_id}')
        try:
            await self.broadcaster.seats_released(seat_ids=cancelled.seat_ids, user_id=user_id)
        except Exception as e:
            Logger.base.warning(f'⚠️ [CANCEL] seat-released broadcast failed: {e}')
        return cancelled
