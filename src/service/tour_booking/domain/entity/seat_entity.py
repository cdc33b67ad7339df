from typing import Optional

import attrs

from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from src.service.tour_booking.domain.value_object.seat_position import SeatPosition


@attrs.frozen
class Seat:
    """
    One physical seat

    Position fields never change after generation. ``status``, ``booked_by``,
    ``blocked_reason`` and ``held_for`` change only through the seat state machine.
    ``held_for`` is the id of the hold booking that owns a blocked seat.
    """

    id: str
    deck: Deck
    position: SeatPosition
    label: str
    status: SeatStatus = SeatStatus.AVAILABLE
    booked_by: Optional[BookedBy] = None
    blocked_reason: Optional[str] = None
    held_for: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status is SeatStatus.AVAILABLE

    @property
    def is_held(self) -> bool:
        return self.status is SeatStatus.BLOCKED and self.held_for is not None
