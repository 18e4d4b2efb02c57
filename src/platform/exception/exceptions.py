class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidSeatIdError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class OutOfRangeError(InvalidSeatIdError):
    pass


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatUnavailableError(ConflictError):
    def __init__(self, seat_id: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} is already booked')


class AlreadyCancelledError(ConflictError):
    def __init__(self, booking_id: object) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} is already cancelled')


class BusyError(CustomBaseError):
    """Guard could not be acquired in time; the caller may retry."""

    retryable = True

    def __init__(self, message: str, retry_after: int = 1) -> None:
        self.retry_after = retry_after
        super().__init__(message, 503)
