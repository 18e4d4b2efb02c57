"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seating.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    reset_bookings_use_case,
)
from src.service.seating.app.query import (
    get_booking_use_case,
    get_seat_grid_use_case,
    list_bookings_use_case,
    validate_seat_selection_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    cancel_booking_use_case,
    reset_bookings_use_case,
    get_seat_grid_use_case,
    validate_seat_selection_use_case,
    list_bookings_use_case,
    get_booking_use_case,
]
