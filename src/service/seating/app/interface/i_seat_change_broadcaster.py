"""Seat Change Broadcaster Interface (Port)"""

from abc import ABC, abstractmethod
from collections.abc import Iterable


class ISeatChangeBroadcaster(ABC):
    """
    Fan out committed seat changes to real-time subscribers

    Note:
        - Called only after the transaction committed
        - Best effort: implementations log failures and never raise
    """

    @abstractmethod
    async def seats_booked(self, *, seat_ids: Iterable[str], user_id: str) -> None:
        """One seat-booked event per seat, on the seat topic and the grid topic"""
        pass

    @abstractmethod
    async def seats_released(self, *, seat_ids: Iterable[str], user_id: str) -> None:
        """One seat-released event per seat, on the seat topic and the grid topic"""
        pass

    @abstractmethod
    async def seats_reset(self, *, user_id: str, cancelled_count: int) -> None:
        """Single seats-reset summary on the grid topic"""
        pass
