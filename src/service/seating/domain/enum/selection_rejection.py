"""Selection Rejection Reason Enum"""

from enum import StrEnum


class SelectionRejection(StrEnum):
    OUT_OF_BOUNDS = 'out_of_bounds'
    ALREADY_BOOKED = 'already_booked'
    SELECTION_LIMIT_EXCEEDED = 'selection_limit_exceeded'
    ISOLATION_VIOLATION = 'isolation_violation'
