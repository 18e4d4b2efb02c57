"""
Seat Grid

Fixed 8x10 seat inventory. A grid is never stored: it is projected from an all-available
base and the confirmed bookings in scope every time it is needed. Instances are
immutable; mark() returns a new grid.
"""

from collections.abc import Iterable, Iterator
from typing import Any

import attrs

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.seat import Seat
from src.service.seating.domain.value_object.seat_id import GRID_COLUMNS, GRID_ROWS, SeatId


StatusMatrix = tuple[tuple[SeatStatus, ...], ...]


def _all_available() -> StatusMatrix:
    row = tuple(SeatStatus.AVAILABLE for _ in range(GRID_COLUMNS))
    return tuple(row for _ in range(GRID_ROWS))


@attrs.define(frozen=True)
class SeatGrid:
    statuses: StatusMatrix = attrs.field(factory=_all_available)

    @classmethod
    def empty(cls) -> 'SeatGrid':
        return cls()

    @classmethod
    def derive(cls, bookings: Iterable[Booking]) -> 'SeatGrid':
        """
        Project the grid from bookings in scope

        Every seat of every confirmed booking becomes booked; other bookings are ignored.

        Raises:
            InvalidSeatIdError: A booking references a malformed or out-of-bounds seat
        """
        booked: list[SeatId] = []
        for booking in bookings:
            if not booking.is_confirmed:
                continue
            booked.extend(SeatId.parse_in_bounds(seat_id) for seat_id in booking.seat_ids)
        return cls.empty().mark(booked, SeatStatus.BOOKED)

    def require(self, seat_id: SeatId | str) -> SeatId:
        """Parse and bounds-check a seat id against this grid"""
        return SeatId.parse_in_bounds(seat_id)

    def status_of(self, seat_id: SeatId | str) -> SeatStatus:
        seat_id = self.require(seat_id)
        return self.statuses[seat_id.row][seat_id.column]

    def seat(self, seat_id: SeatId | str) -> Seat:
        seat_id = self.require(seat_id)
        return Seat(seat_id=seat_id, status=self.statuses[seat_id.row][seat_id.column])

    def mark(self, seat_ids: Iterable[SeatId | str], status: SeatStatus) -> 'SeatGrid':
        matrix = [list(row) for row in self.statuses]
        for seat_id in seat_ids:
            seat_id = self.require(seat_id)
            matrix[seat_id.row][seat_id.column] = status
        return SeatGrid(statuses=tuple(tuple(row) for row in matrix))

    def rows(self) -> Iterator[tuple[Seat, ...]]:
        for row_index, row in enumerate(self.statuses):
            yield tuple(
                Seat(seat_id=SeatId(row=row_index, column=column_index), status=status)
                for column_index, status in enumerate(row)
            )

    def seats_with_status(self, status: SeatStatus) -> list[SeatId]:
        return [seat.seat_id for row in self.rows() for seat in row if seat.status == status]

    def to_payload(self) -> list[list[dict[str, Any]]]:
        return [[seat.to_payload() for seat in row] for row in self.rows()]
