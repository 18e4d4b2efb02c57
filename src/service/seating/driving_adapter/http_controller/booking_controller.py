from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.seating.app.query.get_booking_use_case import GetBookingUseCase
from src.service.seating.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.driving_adapter.http_controller.auth.caller_identity import (
    get_current_user_id,
)
from src.service.seating.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    CancelBookingResponse,
    CancelledBookingRef,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_bookings(
    booking_status: Optional[BookingStatus] = Query(default=None, alias='status'),
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    bookings, total = await use_case.execute(
        user_id=user_id, status=booking_status, limit=limit, offset=offset
    )
    return BookingListResponse(
        bookings=[BookingResponse.from_entity(booking) for booking in bookings],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UUID,
    user_id: str = Depends(get_current_user_id),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    booking = await use_case.execute(booking_id=booking_id, user_id=user_id)
    return BookingDetailResponse(booking=BookingResponse.from_entity(booking))


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    user_id: str = Depends(get_current_user_id),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancelBookingResponse:
    booking = await use_case.execute(booking_id=booking_id, user_id=user_id)
    return CancelBookingResponse(
        message='Booking cancelled',
        booking=CancelledBookingRef(id=booking.id, status=booking.status.value),
    )
