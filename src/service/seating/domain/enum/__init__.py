"""Seating Enums"""

from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.enum.selection_rejection import SelectionRejection

__all__ = ['BookingStatus', 'SeatStatus', 'SelectionRejection']
