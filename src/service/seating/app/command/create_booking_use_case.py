from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.exception.exceptions import SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.state.i_keyed_lock import IKeyedLock
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster
from src.service.seating.domain.entity.booking_entity import Booking, validate_seat_ids
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.pricing_calculator import PricingCalculator
from src.service.seating.domain.seat_grid import SeatGrid


class CreateBookingUseCase:
    """
    Book a set of seats for a user in one transaction.

    Flow:
    1. Validate count / duplicates / format / bounds (nothing touches the store on failure)
    2. Hold the seat guard for every requested seat (sorted, bounded wait)
    3. Derive the grid from the user's confirmed bookings and re-check availability
    4. Price, persist, commit
    5. Release the guard, then broadcast seat-booked per seat
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        seat_lock: IKeyedLock,
        broadcaster: ISeatChangeBroadcaster,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_lock = seat_lock
        self.broadcaster = broadcaster

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow_factory.provider]),
        seat_lock: IKeyedLock = Depends(Provide[Container.seat_lock]),
        broadcaster: ISeatChangeBroadcaster = Depends(
            Provide[Container.seat_change_broadcaster]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory, seat_lock=seat_lock, broadcaster=broadcaster)

    @Logger.io
    async def execute(self, *, user_id: str, seat_ids: List[str]) -> Booking:
        requested = validate_seat_ids(seat_ids)
        canonical_ids = [str(seat_id) for seat_id in requested]

        async with self.seat_lock.hold(canonical_ids):
            async with self.uow_factory() as uow:
                bookings = await uow.booking_query_repo.list_confirmed_by_user(user_id=user_id)
                grid = SeatGrid.derive(bookings)

                for seat_id in requested:
                    if grid.status_of(seat_id) != SeatStatus.AVAILABLE:
                        raise SeatUnavailableError(str(seat_id))

                booking = Booking.create(
                    user_id=user_id,
                    seat_ids=canonical_ids,
                    total_price=PricingCalculator.total_price(requested, grid),
                )
                booking = await uow.booking_command_repo.create(booking=booking)
                await uow.commit()

        Logger.base.info(
            f'🎫 [BOOK] user={user_id} booked {canonical_ids} for {booking.total_price}'
        )
        try:
            await self.broadcaster.seats_booked(seat_ids=booking.seat_ids, user_id=user_id)
        except Exception as e:
            # Already committed; a failed fan-out never undoes it
            Logger.base.warning(f'⚠️ [BOOK] seat-booked broadcast failed: {e}')
        return booking
