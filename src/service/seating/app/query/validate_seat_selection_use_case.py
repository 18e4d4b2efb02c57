from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import UnitOfWorkFactory
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto.selection_result import SelectionResult
from src.service.seating.domain.entity.booking_entity import MAX_SEATS_PER_BOOKING
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.enum.selection_rejection import SelectionRejection
from src.service.seating.domain.gap_constraint_validator import GapConstraintValidator
from src.service.seating.domain.seat_grid import SeatGrid
from src.service.seating.domain.value_object.seat_id import SeatId


class ValidateSeatSelectionUseCase:
    """
    Check one proposed seat against the caller's current selection.

    The selection is an untrusted client hint: it is parsed and re-validated against a
    freshly derived grid on every call and never stored.

    Order of checks:
    1. Candidate outside the grid -> out_of_bounds
    2. Candidate booked in the caller's scope -> already_booked
    3. Candidate already selected -> valid (deselection)
    4. Selection already full -> selection_limit_exceeded
    5. Move would orphan a seat -> isolation_violation
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: UnitOfWorkFactory = Depends(Provide[Container.uow_factory.provider]),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    async def _grid_for(self, user_id: Optional[str]) -> SeatGrid:
        if not user_id:
            return SeatGrid.empty()
        async with self.uow_factory() as uow:
            bookings = await uow.booking_query_repo.list_confirmed_by_user(user_id=user_id)
        return SeatGrid.derive(bookings)

    @Logger.io
    async def execute(
        self,
        *,
        user_id: Optional[str],
        row_index: int,
        column_index: int,
        current_selection: List[str],
    ) -> SelectionResult:
        candidate = SeatId(row=row_index, column=column_index)
        if not candidate.in_bounds:
            return SelectionResult.reject(
                SelectionRejection.OUT_OF_BOUNDS,
                f'Seat coordinates ({row_index}, {column_index}) are outside the grid',
            )

        # Malformed or out-of-bounds entries raise InvalidSeatIdError (400)
        selection = [SeatId.parse_in_bounds(seat_id) for seat_id in current_selection]
        grid = await self._grid_for(user_id)

        if grid.status_of(candidate) == SeatStatus.BOOKED:
            return SelectionResult.reject(
                SelectionRejection.ALREADY_BOOKED, f'Seat {candidate.label} is already booked'
            )

        if candidate in selection:
            return SelectionResult.accept(f'Seat {candidate.label} deselected')

        if len(set(selection)) >= MAX_SEATS_PER_BOOKING:
            return SelectionResult.reject(
                SelectionRejection.SELECTION_LIMIT_EXCEEDED,
                f'Cannot select more than {MAX_SEATS_PER_BOOKING} seats',
            )

        isolated = GapConstraintValidator.check(grid, candidate, selection)
        if isolated is not None:
            return SelectionResult.reject(
                SelectionRejection.ISOLATION_VIOLATION,
                f'Selecting seat {candidate.label} would leave seat {isolated.label} '
                f'({isolated}) isolated',
                isolated_seat_id=str(isolated),
            )

        return SelectionResult.accept(f'Seat {candidate.label} can be selected')
