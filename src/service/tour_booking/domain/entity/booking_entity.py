from datetime import datetime
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError, InvalidBookingState
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.domain.enum.booking_status import (
    BookingSource,
    BookingStatus,
    HoldCreatedBy,
    PaymentStatus,
)
from src.service.tour_booking.domain.enum.guest import Gender, GuestType
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.hold_expiry_policy import is_expired
from src.service.tour_booking.domain.value_object.payment_record import PaymentRecord


@attrs.frozen
class Passenger:
    """Persisted guest. The couple pricing tier is recorded as adult."""

    name: str
    type: GuestType
    gender: Gender
    age: Optional[int] = None
    seat_id: Optional[str] = None
    seat_label: Optional[str] = None


@attrs.define
class Booking:
    id: str
    booking_ref: str
    package_id: str
    agency_id: str
    package_title: str
    guest_name: str
    guest_phone: str
    boarding_point: str
    dropping_point: str
    subtotal: int
    total_amount: int
    status: BookingStatus
    source: BookingSource = BookingSource.WALK_IN
    passengers: List[Passenger] = attrs.field(factory=list)
    selected_seat_ids: List[str] = attrs.field(factory=list)
    discount_amount: int = 0
    discount_reason: Optional[str] = None
    advance_paid: int = 0
    due_amount: int = 0
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_history: List[PaymentRecord] = attrs.field(factory=list)
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_nid: Optional[str] = None
    emergency_contact: Optional[str] = None
    hold_expires_at: Optional[datetime] = None
    hold_created_by: Optional[HoldCreatedBy] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: str,
        booking_ref: str,
        package_id: str,
        agency_id: str,
        package_title: str,
        guest_name: str,
        guest_phone: str,
        boarding_point: str,
        dropping_point: str,
        passengers: List[Passenger],
        selected_seat_ids: List[str],
        subtotal: int,
        discount_amount: int,
        advance_paid: int,
        status: BookingStatus,
        source: BookingSource,
        payment_method: PaymentMethod,
        payment_history: List[PaymentRecord],
        now: datetime,
        discount_reason: Optional[str] = None,
        agent_id: Optional[str] = None,
        agent_name: Optional[str] = None,
        guest_email: Optional[str] = None,
        guest_nid: Optional[str] = None,
        emergency_contact: Optional[str] = None,
        hold_expires_at: Optional[datetime] = None,
        hold_created_by: Optional[HoldCreatedBy] = None,
        notes: Optional[str] = None,
    ) -> 'Booking':
        total_amount = subtotal - discount_amount
        if discount_amount < 0 or total_amount < 0:
            raise DomainError(f'Discount {discount_amount} is outside 0..{subtotal}')
        if advance_paid < 0 or advance_paid > total_amount:
            raise DomainError(f'Advance {advance_paid} is outside 0..{total_amount}')
        if status is BookingStatus.HOLD and (advance_paid or hold_expires_at is None):
            raise DomainError('A hold booking carries no advance and must have an expiry')

        return cls(
            id=id,
            booking_ref=booking_ref,
            package_id=package_id,
            agency_id=agency_id,
            package_title=package_title,
            guest_name=guest_name,
            guest_phone=guest_phone,
            guest_email=guest_email,
            guest_nid=guest_nid,
            emergency_contact=emergency_contact,
            boarding_point=boarding_point,
            dropping_point=dropping_point,
            passengers=list(passengers),
            selected_seat_ids=list(selected_seat_ids),
            subtotal=subtotal,
            discount_amount=discount_amount,
            discount_reason=discount_reason,
            total_amount=total_amount,
            advance_paid=advance_paid,
            due_amount=total_amount - advance_paid,
            payment_method=payment_method,
            payment_status=PaymentStatus.from_amounts(
                total_amount=total_amount, advance_paid=advance_paid
            ),
            payment_history=list(payment_history),
            status=status,
            source=source,
            agent_id=agent_id,
            agent_name=agent_name,
            hold_expires_at=hold_expires_at,
            hold_created_by=hold_created_by,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_hold(self) -> bool:
        return self.status is BookingStatus.HOLD

    def is_hold_expired(self, now: datetime) -> bool:
        return (
            self.is_hold
            and self.hold_expires_at is not None
            and is_expired(self.hold_expires_at, now)
        )

    @Logger.io
    def confirm_hold(self, *, payment: PaymentRecord, now: datetime) -> 'Booking':
        """Convert a hold into a payment-collected booking"""
        if not self.is_hold:
            raise InvalidBookingState(f'Booking {self.booking_ref} is {self.status}, not on hold')
        if payment.amount < 0 or payment.amount > self.total_amount:
            raise DomainError(f'Advance {payment.amount} is outside 0..{self.total_amount}')

        payment_status = PaymentStatus.from_amounts(
            total_amount=self.total_amount, advance_paid=payment.amount
        )
        return attrs.evolve(
            self,
            status=(
                BookingStatus.CONFIRMED
                if payment_status is PaymentStatus.FULLY_PAID
                else BookingStatus.PENDING
            ),
            advance_paid=payment.amount,
            due_amount=self.total_amount - payment.amount,
            payment_method=payment.method,
            payment_status=payment_status,
            payment_history=[*self.payment_history, payment],
            hold_expires_at=None,
            updated_at=now,
        )

    def cancel(self, *, now: datetime) -> 'Booking':
        if not self.status.holds_seats:
            raise InvalidBookingState(f'Booking {self.booking_ref} is already {self.status}')
        return attrs.evolve(self, status=BookingStatus.CANCELLED, updated_at=now)

    def expire(self, *, now: datetime) -> 'Booking':
        if not self.is_hold:
            raise InvalidBookingState(f'Booking {self.booking_ref} is {self.status}, not on hold')
        return attrs.evolve(self, status=BookingStatus.EXPIRED, updated_at=now)
