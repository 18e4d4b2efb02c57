"""Seat Value Object"""

from typing import Any

import attrs

from src.service.seating.domain.enum.seat_status import SeatStatus
from src.service.seating.domain.value_object.seat_id import SeatId


@attrs.define(frozen=True)
class Seat:
    seat_id: SeatId
    status: SeatStatus = SeatStatus.AVAILABLE

    @property
    def row(self) -> int:
        return self.seat_id.row

    @property
    def column(self) -> int:
        return self.seat_id.column

    @property
    def row_label(self) -> str:
        return self.seat_id.row_label

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def to_payload(self) -> dict[str, Any]:
        return {
            'id': str(self.seat_id),
            'row': self.row,
            'row_label': self.row_label,
            'column': self.column,
            'status': self.status.value,
        }
