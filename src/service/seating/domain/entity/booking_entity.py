from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
import uuid

import attrs
import uuid_utils

from src.platform.exception.exceptions import AlreadyCancelledError, DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.value_object.seat_id import SeatId


MAX_SEATS_PER_BOOKING = 8
CENT = Decimal('0.01')


def new_booking_id() -> uuid.UUID:
    """Time-ordered UUID7, as a stdlib UUID so SQLAlchemy can bind it directly"""
    return uuid.UUID(str(uuid_utils.uuid7()))


def validate_seat_ids(seat_ids: List[str]) -> List[SeatId]:
    """Count, duplicate, format and bounds checks; raises before anything touches the store"""
    if not isinstance(seat_ids, list) or not seat_ids:
        raise DomainError('seat_ids must be a non-empty list')
    if len(seat_ids) > MAX_SEATS_PER_BOOKING:
        raise DomainError(f'Cannot book more than {MAX_SEATS_PER_BOOKING} seats')

    parsed = [SeatId.parse_in_bounds(seat_id) for seat_id in seat_ids]
    if len(set(parsed)) != len(parsed):
        raise DomainError('seat_ids must not contain duplicates')
    return parsed


@attrs.define
class Booking:
    id: uuid.UUID
    user_id: str
    seat_ids: List[str]
    total_price: Decimal
    status: BookingStatus = BookingStatus.CONFIRMED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @classmethod
    @Logger.io
    def create(cls, *, user_id: str, seat_ids: List[str], total_price: Decimal) -> 'Booking':
        validate_seat_ids(seat_ids)
        if total_price < 0:
            raise DomainError('total_price must not be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=new_booking_id(),
            user_id=user_id,
            seat_ids=list(seat_ids),
            total_price=Decimal(total_price).quantize(CENT),
            status=BookingStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    @Logger.io
    def cancel(self) -> 'Booking':
        """
        Cancel booking (Domain validation)

        Raises:
            AlreadyCancelledError: When the booking is already cancelled
        """
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError(self.id)

        now = datetime.now(timezone.utc)
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now, cancelled_at=now)
