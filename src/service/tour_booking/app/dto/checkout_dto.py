"""
Checkout DTOs

Inputs and result of a multi-package checkout.
"""

from datetime import datetime
from typing import List, Optional

import attrs

from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.guest_entity import Guest
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage
from src.service.tour_booking.domain.enum.booking_status import BookingSource, HoldCreatedBy
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.user_role import UserRole
from src.service.tour_booking.domain.pricing_calculator import (
    calculate_package_subtotal,
    named_guests,
)


@attrs.define
class PackageBooking:
    """One package's part of a checkout; exists only until the checkout is submitted"""

    package: TourPackage
    guests: List[Guest] = attrs.field(factory=list)
    boarding_point: str = ''
    dropping_point: str = ''
    custom_dropping_point: Optional[str] = None
    use_custom_dropping_point: bool = False
    selected_seat_ids: List[str] = attrs.field(factory=list)

    @property
    def package_id(self) -> str:
        return self.package.id

    @property
    def named_guests(self) -> List[Guest]:
        return named_guests(self.guests)

    @property
    def subtotal(self) -> int:
        return calculate_package_subtotal(self.guests, self.package)

    @property
    def effective_dropping_point(self) -> str:
        if self.use_custom_dropping_point and self.custom_dropping_point:
            return self.custom_dropping_point
        return self.dropping_point


@attrs.frozen
class PaymentDecision:
    """Shared payment/discount decision for every package in the checkout"""

    payment_method: PaymentMethod = PaymentMethod.CASH
    transaction_id: Optional[str] = None
    advance_paid: int = 0
    discount_amount: int = 0
    discount_reason: Optional[str] = None
    source: BookingSource = BookingSource.WALK_IN
    notes: Optional[str] = None
    is_hold: bool = False


@attrs.frozen
class CheckoutInitiator:
    user_id: str
    name: str
    agency_id: str
    role: UserRole

    @property
    def is_agent(self) -> bool:
        return self.role is UserRole.SALES_AGENT

    @property
    def hold_created_by(self) -> HoldCreatedBy:
        return HoldCreatedBy.AGENT if self.is_agent else HoldCreatedBy.AGENCY_ADMIN


@attrs.define
class CheckoutResult:
    bookings: List[Booking]
    subtotal_before_discount: int
    discount_amount: int
    grand_total: int
    advance_paid: int
    minimum_advance: int
    is_hold: bool
    hold_expires_at: Optional[datetime] = None

    @property
    def booking_refs(self) -> List[str]:
        return [booking.booking_ref for booking in self.bookings]
