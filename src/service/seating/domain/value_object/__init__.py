"""Seating Value Objects"""

from src.service.seating.domain.value_object.seat import Seat
from src.service.seating.domain.value_object.seat_id import GRID_COLUMNS, GRID_ROWS, SeatId

__all__ = ['GRID_COLUMNS', 'GRID_ROWS', 'Seat', 'SeatId']
