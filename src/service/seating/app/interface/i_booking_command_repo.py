"""
Booking Command Repository Interface

Write side of the booking store. Every method runs on the unit of work's session; nothing
is visible to other sessions until the unit of work commits.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.seating.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_for_update_by_id_and_user(
        self, *, booking_id: UUID, user_id: str
    ) -> Optional[Booking]:
        """
        Load a booking owned by user_id, locking its row for the rest of the transaction

        Returns:
            None when the booking does not exist or belongs to another user
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """Persist status and timestamps of an existing booking"""
        pass

    @abstractmethod
    async def cancel_all_confirmed_by_user(self, *, user_id: str) -> int:
        """
        Soft-cancel every confirmed booking owned by user_id

        Returns:
            Number of bookings cancelled
        """
        pass
