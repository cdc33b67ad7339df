from abc import ABC, abstractmethod
from typing import Optional

from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout


class ISeatLayoutQueryRepo(ABC):
    @abstractmethod
    async def load_seat_layout(self, *, package_id: str) -> Optional[SeatLayout]:
        """Snapshot of the package's layout, or None when seat selection is off"""
        pass
