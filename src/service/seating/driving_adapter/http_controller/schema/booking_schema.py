from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.service.seating.domain.entity.booking_entity import Booking


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 'alice',
                'seat_ids': ['3-4', '3-5'],
                'total_price': 1500.0,
                'status': 'confirmed',
                'booking_date': '2025-01-10T10:30:00Z',
                'updated_at': '2025-01-10T10:30:00Z',
                'cancelled_at': None,
            }
        },
    }

    id: UUID
    user_id: str
    seat_ids: List[str]
    total_price: float
    status: str
    booking_date: datetime
    updated_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        if booking.created_at is None:
            raise ValueError('Persisted booking must have created_at')
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            seat_ids=booking.seat_ids,
            total_price=float(booking.total_price),
            status=booking.status.value,
            booking_date=booking.created_at,
            updated_at=booking.updated_at,
            cancelled_at=booking.cancelled_at,
        )


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int
    limit: int
    offset: int


class BookingDetailResponse(BaseModel):
    booking: BookingResponse


class CancelledBookingRef(BaseModel):
    id: UUID
    status: str


class CancelBookingResponse(BaseModel):
    message: str
    booking: CancelledBookingRef
