from decimal import Decimal

import pytest

from src.platform.exception.exceptions import (
    AlreadyCancelledError,
    ConflictError,
    DomainError,
    InvalidSeatIdError,
    OutOfRangeError,
)
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


class TestBookingCreate:
    def test_creates_confirmed_booking(self) -> None:
        booking = Booking.create(
            user_id='alice', seat_ids=['3-4', '3-5'], total_price=Decimal('1500')
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.seat_ids == ['3-4', '3-5']
        assert booking.total_price == Decimal('1500.00')
        assert booking.created_at is not None
        assert booking.cancelled_at is None
        assert booking.id.version == 7

    def test_ids_are_unique(self) -> None:
        first = Booking.create(user_id='alice', seat_ids=['0-0'], total_price=Decimal('1000'))
        second = Booking.create(user_id='alice', seat_ids=['0-1'], total_price=Decimal('1000'))

        assert first.id != second.id

    @pytest.mark.parametrize(
        'seat_ids,message',
        [
            ([], 'non-empty'),
            ([f'0-{c}' for c in range(9)], 'more than 8'),
            (['3-5', '3-5'], 'duplicates'),
        ],
    )
    def test_rejects_bad_seat_lists(self, seat_ids: list[str], message: str) -> None:
        with pytest.raises(DomainError, match=message):
            Booking.create(user_id='alice', seat_ids=seat_ids, total_price=Decimal('0'))

    def test_rejects_malformed_seat(self) -> None:
        with pytest.raises(InvalidSeatIdError):
            Booking.create(user_id='alice', seat_ids=['03-5'], total_price=Decimal('0'))

    def test_rejects_seat_outside_grid(self) -> None:
        with pytest.raises(OutOfRangeError):
            Booking.create(user_id='alice', seat_ids=['0-10'], total_price=Decimal('0'))

    def test_rejects_negative_price(self) -> None:
        with pytest.raises(DomainError):
            Booking.create(user_id='alice', seat_ids=['0-0'], total_price=Decimal('-1'))


class TestBookingCancel:
    def test_cancel_sets_status_and_timestamp(self) -> None:
        booking = Booking.create(user_id='alice', seat_ids=['0-0'], total_price=Decimal('1000'))

        cancelled = booking.cancel()

        assert cancelled.status == BookingStatus.CANCELLED
        assert cancelled.cancelled_at is not None
        assert booking.status == BookingStatus.CONFIRMED

    def test_cancel_twice_is_a_conflict(self) -> None:
        cancelled = Booking.create(
            user_id='alice', seat_ids=['0-0'], total_price=Decimal('1000')
        ).cancel()

        with pytest.raises(AlreadyCancelledError) as exc_info:
            cancelled.cancel()

        assert isinstance(exc_info.value, ConflictError)
        assert str(cancelled.id) in exc_info.value.message
