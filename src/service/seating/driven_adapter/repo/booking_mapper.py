from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.driven_adapter.model.booking_model import BookingModel


def to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        seat_ids=list(db_booking.seat_ids or []),
        total_price=db_booking.total_price,
        status=BookingStatus(db_booking.status),
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
        cancelled_at=db_booking.cancelled_at,
    )
