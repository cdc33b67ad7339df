"""
Seat Layout Command Repo Interface

Write side of seat layouts. ``compare_and_swap_seat_status`` is the only way a
seat changes after its layout is saved; implementations must serialize it per
seat so at most one concurrent claim on a seat succeeds.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy


class ISeatLayoutCommandRepo(ABC):
    @abstractmethod
    async def save_seat_layout(self, *, layout: SeatLayout) -> SeatLayout:
        """Store (or replace) the layout of ``layout.package_id``"""
        pass

    @abstractmethod
    async def delete_seat_layout(self, *, package_id: str) -> bool:
        pass

    @abstractmethod
    async def compare_and_swap_seat_status(
        self,
        *,
        package_id: str,
        seat_id: str,
        expected_status: SeatStatus,
        new_status: SeatStatus,
        booked_by: Optional[BookedBy] = None,
        blocked_reason: Optional[str] = None,
        held_for: Optional[str] = None,
        expected_holder: Optional[str] = None,
    ) -> Seat:
        """
        Atomically move one seat from ``expected_status`` to ``new_status``

        Raises:
            NotFoundError: package has no layout
            UnknownSeat: seat id is not in the current layout
            SeatUnavailable: current status differs from ``expected_status``
                (a lost race), or a held seat belongs to another booking
            InvalidSeatTransition: transition is not allowed
        """
        pass
