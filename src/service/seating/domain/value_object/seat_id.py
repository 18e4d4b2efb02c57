"""
Seat Id Value Object

Canonical form is '<row>-<column>' with zero-based decimal indexes and no leading zeros,
e.g. '0-0' (A1) or '7-9' (H10).
"""

import re

import attrs

from src.platform.exception.exceptions import InvalidSeatIdError, OutOfRangeError


GRID_ROWS = 8
GRID_COLUMNS = 10

_SEAT_ID_PATTERN = re.compile(r'(0|[1-9]\d*)-(0|[1-9]\d*)')


@attrs.define(frozen=True, order=True)
class SeatId:
    """Seat coordinates (Value Object)"""

    row: int
    column: int

    def __str__(self) -> str:
        return f'{self.row}-{self.column}'

    @property
    def row_label(self) -> str:
        return chr(ord('A') + self.row)

    @property
    def label(self) -> str:
        """Human-facing seat name, e.g. 'D6' for '3-5'"""
        return f'{self.row_label}{self.column + 1}'

    @property
    def in_bounds(self) -> bool:
        return 0 <= self.row < GRID_ROWS and 0 <= self.column < GRID_COLUMNS

    @property
    def is_interior(self) -> bool:
        """Seats off every edge; only these can be left isolated"""
        return 0 < self.row < GRID_ROWS - 1 and 0 < self.column < GRID_COLUMNS - 1

    def require_in_bounds(self) -> 'SeatId':
        if not self.in_bounds:
            raise OutOfRangeError(
                f'Seat {self} is outside the {GRID_ROWS}x{GRID_COLUMNS} grid'
            )
        return self

    @classmethod
    def parse(cls, value: object) -> 'SeatId':
        """Parse canonical seat id string; format only, bounds are not checked"""
        if isinstance(value, SeatId):
            return value
        if not isinstance(value, str) or not (match := _SEAT_ID_PATTERN.fullmatch(value)):
            raise InvalidSeatIdError(
                f'Invalid seat ID format: {value!r}. Expected: row-column (e.g. 3-5)'
            )
        return cls(row=int(match.group(1)), column=int(match.group(2)))

    @classmethod
    def parse_in_bounds(cls, value: object) -> 'SeatId':
        return cls.parse(value).require_in_bounds()
