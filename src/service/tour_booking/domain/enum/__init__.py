"""Tour Booking Domain Enums"""

from src.service.tour_booking.domain.enum.booking_status import (
    BookingSource,
    BookingStatus,
    HoldCreatedBy,
    PaymentStatus,
)
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.guest import Gender, GuestType
from src.service.tour_booking.domain.enum.hold_urgency import HoldUrgency
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.enum.user_role import UserRole
from src.service.tour_booking.domain.enum.vehicle import AcType, BusBrand, VehicleCategory

__all__ = [
    'AcType',
    'BookingSource',
    'BookingStatus',
    'BusBrand',
    'Deck',
    'Gender',
    'GuestType',
    'HoldCreatedBy',
    'HoldUrgency',
    'PaymentMethod',
    'PaymentStatus',
    'SeatArrangement',
    'SeatStatus',
    'UserRole',
    'VehicleCategory',
]
