"""
Hold DTOs

Request/Result DTOs for hold conversion and hold expiry.
"""

from typing import Dict, List, Optional

import attrs

from src.service.tour_booking.domain.enum.payment_method import PaymentMethod


@attrs.frozen
class HoldPayment:
    """Payment collected when a hold is converted into a sale"""

    payment_method: PaymentMethod
    advance_paid: int
    transaction_id: Optional[str] = None


@attrs.define
class ReleaseExpiredHoldsResult:
    expired_booking_ids: List[str] = attrs.field(factory=list)
    released_seat_ids: Dict[str, List[str]] = attrs.field(factory=dict)  # booking_id -> seats
    skipped_seats: Dict[str, str] = attrs.field(factory=dict)  # seat_id -> reason

    @property
    def total_expired(self) -> int:
        return len(self.expired_booking_ids)

    @property
    def total_released(self) -> int:
        return sum(len(seat_ids) for seat_ids in self.released_seat_ids.values())
