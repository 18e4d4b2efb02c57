"""Selection validation result DTO."""

from typing import Optional

import attrs

from src.service.seating.domain.enum.selection_rejection import SelectionRejection


@attrs.define(frozen=True)
class SelectionResult:
    """
    Outcome of validating one proposed seat against the caller's current selection.

    reason is None when the move is allowed; isolated_seat_id is set only for
    isolation violations and names the seat the move would orphan.
    """

    valid: bool
    message: str
    reason: Optional[SelectionRejection] = None
    isolated_seat_id: Optional[str] = None

    @classmethod
    def accept(cls, message: str) -> 'SelectionResult':
        return cls(valid=True, message=message)

    @classmethod
    def reject(
        cls,
        reason: SelectionRejection,
        message: str,
        *,
        isolated_seat_id: Optional[str] = None,
    ) -> 'SelectionResult':
        return cls(
            valid=False, message=message, reason=reason, isolated_seat_id=isolated_seat_id
        )
