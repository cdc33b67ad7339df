"""Application layer DTOs"""

from src.service.tour_booking.app.dto.checkout_dto import (
    CheckoutInitiator,
    CheckoutResult,
    PackageBooking,
    PaymentDecision,
)
from src.service.tour_booking.app.dto.hold_dto import HoldPayment, ReleaseExpiredHoldsResult
from src.service.tour_booking.app.dto.seat_layout_dto import DeckView, SeatLayoutView

__all__ = [
    'CheckoutInitiator',
    'CheckoutResult',
    'DeckView',
    'HoldPayment',
    'PackageBooking',
    'PaymentDecision',
    'ReleaseExpiredHoldsResult',
    'SeatLayoutView',
]
