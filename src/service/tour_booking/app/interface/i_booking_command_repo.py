from abc import ABC, abstractmethod
from typing import Optional

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def next_booking_ref(self, *, agency_id: str) -> str:
        """Next per-agency booking reference, zero padded (e.g. ``000042``)"""
        pass

    @abstractmethod
    async def create_booking(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def update_booking(
        self, *, booking: Booking, expected_status: Optional[BookingStatus] = None
    ) -> Booking:
        """
        Overwrite the stored booking.

        With ``expected_status`` the write is a compare-and-swap: it raises
        BookingStateConflict unless the stored booking still has that status.
        """
        pass

    @abstractmethod
    async def delete_booking(self, *, booking_id: str) -> bool:
        """Remove a booking written by a checkout that is being rolled back"""
        pass
