from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_status(self, *, status: BookingStatus) -> List[Booking]:
        pass
