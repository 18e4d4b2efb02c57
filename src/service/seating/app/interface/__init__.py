"""Application layer interfaces (Ports)"""

from src.service.seating.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.seating.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.seating.app.interface.i_seat_change_broadcaster import ISeatChangeBroadcaster

__all__ = ['IBookingCommandRepo', 'IBookingQueryRepo', 'ISeatChangeBroadcaster']
