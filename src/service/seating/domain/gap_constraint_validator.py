"""
Gap Constraint Validator

No-isolated-seat rule: a new selection must not leave an available seat whose two
immediate neighbours on one axis are both taken (selected or booked). Such a seat can
no longer be sold as part of any group.

Only interior seats (row 1..6, column 1..8) are ever flagged; a seat on an edge always
has an open side. The whole grid is scanned, not just the neighbourhood of the
candidate.
"""

from collections.abc import Iterable
from typing import Optional

from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.seat_grid import SeatGrid
from src.service.seating.domain.value_object.seat_id import GRID_COLUMNS, GRID_ROWS, SeatId


class GapConstraintValidator:
    @staticmethod
    def _taken(status: SeatStatus) -> bool:
        return status != SeatStatus.AVAILABLE

    @classmethod
    def find_isolated_seat(cls, grid: SeatGrid) -> Optional[SeatId]:
        """First isolated seat, rows left-to-right then columns top-to-bottom"""
        statuses = grid.statuses

        for row in range(1, GRID_ROWS - 1):
            for column in range(1, GRID_COLUMNS - 1):
                if (
                    statuses[row][column] == SeatStatus.AVAILABLE
                    and cls._taken(statuses[row][column - 1])
                    and cls._taken(statuses[row][column + 1])
                ):
                    return SeatId(row=row, column=column)

        for column in range(1, GRID_COLUMNS - 1):
            for row in range(1, GRID_ROWS - 1):
                if (
                    statuses[row][column] == SeatStatus.AVAILABLE
                    and cls._taken(statuses[row - 1][column])
                    and cls._taken(statuses[row + 1][column])
                ):
                    return SeatId(row=row, column=column)

        return None

    @classmethod
    def check(
        cls,
        grid: SeatGrid,
        candidate: SeatId | str,
        tentative_selection: Iterable[SeatId | str] = (),
    ) -> Optional[SeatId]:
        """
        Seat that selecting candidate would leave isolated, or None when the move is allowed

        Deselection (candidate already taken in grid or already in the selection) always
        passes. The caller's grid is not modified.
        """
        candidate = grid.require(candidate)
        selection = {grid.require(seat_id) for seat_id in tentative_selection}

        if grid.status_of(candidate) != SeatStatus.AVAILABLE or candidate in selection:
            return None

        # Seats already taken stay as they are; only available ones become selected
        to_select = [
            seat_id
            for seat_id in selection | {candidate}
            if grid.status_of(seat_id) == SeatStatus.AVAILABLE
        ]
        tentative = grid.mark(to_select, SeatStatus.SELECTED)
        return cls.find_isolated_seat(tentative)

    @classmethod
    def validate(
        cls,
        grid: SeatGrid,
        candidate: SeatId | str,
        tentative_selection: Iterable[SeatId | str] = (),
    ) -> bool:
        return cls.check(grid, candidate, tentative_selection) is None
