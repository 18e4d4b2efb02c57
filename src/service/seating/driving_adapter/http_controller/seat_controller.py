from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.seating.app.command.reset_bookings_use_case import ResetBookingsUseCase
from src.service.seating.app.query.get_seat_grid_use_case import GetSeatGridUseCase
from src.service.seating.app.query.validate_seat_selection_use_case import (
    ValidateSeatSelectionUseCase,
)
from src.service.seating.driving_adapter.http_controller.auth.caller_identity import (
    get_current_user_id,
    get_optional_user_id,
)
from src.service.seating.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)
from src.service.seating.driving_adapter.http_controller.schema.seat_schema import (
    BookSeatsRequest,
    ResetSeatsResponse,
    SeatGridResponse,
    SelectSeatAcceptedResponse,
    SelectSeatRejectedResponse,
    SelectSeatRequest,
)


router = APIRouter()


@router.get('/grid')
@Logger.io
async def get_seat_grid(
    user_id: Optional[str] = Depends(get_optional_user_id),
    use_case: GetSeatGridUseCase = Depends(GetSeatGridUseCase.depends),
) -> SeatGridResponse:
    grid = await use_case.execute(user_id=user_id)
    return SeatGridResponse(grid=grid.to_payload(), user_id=user_id)


@router.post(
    '/select',
    response_model=SelectSeatAcceptedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {'model': SelectSeatRejectedResponse}},
)
@Logger.io
async def validate_seat_selection(
    request: SelectSeatRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    use_case: ValidateSeatSelectionUseCase = Depends(ValidateSeatSelectionUseCase.depends),
) -> SelectSeatAcceptedResponse | JSONResponse:
    result = await use_case.execute(
        user_id=user_id,
        row_index=request.row_index,
        column_index=request.column_index,
        current_selection=request.current_selection,
    )
    if result.valid:
        return SelectSeatAcceptedResponse(message=result.message)

    rejection = SelectSeatRejectedResponse(
        reason=str(result.reason),
        detail=result.message,
        isolated_seat_id=result.isolated_seat_id,
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=rejection.model_dump())


@router.post('/book', status_code=status.HTTP_201_CREATED)
@Logger.io
async def book_seats(
    request: BookSeatsRequest,
    user_id: str = Depends(get_current_user_id),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(user_id=user_id, seat_ids=request.seat_ids)
    return BookingResponse.from_entity(booking)


@router.post('/reset')
@Logger.io
async def reset_seats(
    user_id: str = Depends(get_current_user_id),
    use_case: ResetBookingsUseCase = Depends(ResetBookingsUseCase.depends),
) -> ResetSeatsResponse:
    cancelled_count = await use_case.execute(user_id=user_id)
    return ResetSeatsResponse(
        message=f'Cancelled {cancelled_count} booking(s)', cancelled_count=cancelled_count
    )
