from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def list_confirmed_by_user(self, *, user_id: str) -> List[Booking]:
        """Confirmed bookings in the user's scope, the input of grid derivation"""
        pass

    @abstractmethod
    async def list_by_user(
        self,
        *,
        user_id: str,
        status: Optional[BookingStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Booking], int]:
        """
        Page of the user's bookings, newest first

        Returns:
            (bookings in the page, total matching bookings)
        """
        pass

    @abstractmethod
    async def get_by_id_and_user(self, *, booking_id: UUID, user_id: str) -> Optional[Booking]:
        pass
