from typing import Any, List, Optional

from pydantic import BaseModel, Field


class SeatGridResponse(BaseModel):
    grid: List[List[dict[str, Any]]]
    user_id: Optional[str] = None


class SelectSeatRequest(BaseModel):
    row_index: int
    column_index: int
    current_selection: List[str] = Field(default_factory=list, max_length=80)

    model_config = {
        'json_schema_extra': {
            'example': {'row_index': 3, 'column_index': 6, 'current_selection': ['3-4', '3-5']}
        }
    }


class SelectSeatAcceptedResponse(BaseModel):
    valid: bool = True
    message: str


class SelectSeatRejectedResponse(BaseModel):
    valid: bool = False
    reason: str
    detail: str
    isolated_seat_id: Optional[str] = None


class BookSeatsRequest(BaseModel):
    seat_ids: List[str]

    model_config = {'json_schema_extra': {'example': {'seat_ids': ['3-4', '3-5', '3-6']}}}


class ResetSeatsResponse(BaseModel):
    message: str
    cancelled_count: int
