from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.service.tour_booking.domain.enum.booking_status import (
    BookingSource,
    BookingStatus,
    HoldCreatedBy,
    PaymentStatus,
)
from src.service.tour_booking.domain.enum.guest import Gender, GuestType
from src.service.tour_booking.domain.enum.hold_urgency import HoldUrgency
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.user_role import UserRole


class InitiatorRequest(BaseModel):
    user_id: str
    name: str
    agency_id: str
    role: UserRole


class GuestRequest(BaseModel):
    name: str = ''
    phone: str = ''
    email: Optional[str] = None
    nid: Optional[str] = None
    emergency_contact: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    type: Optional[GuestType] = None  # derived from age when omitted
    gender: Gender = Gender.MALE


class PackageBookingRequest(BaseModel):
    package_id: str
    guests: List[GuestRequest] = Field(min_length=1)
    boarding_point: str = ''
    dropping_point: str = ''
    custom_dropping_point: Optional[str] = None
    use_custom_dropping_point: bool = False
    selected_seat_ids: List[str] = []  # positional: guest i sits in seat i


class CheckoutRequest(BaseModel):
    initiator: InitiatorRequest
    packages: List[PackageBookingRequest] = Field(min_length=1)
    payment_method: PaymentMethod = PaymentMethod.CASH
    transaction_id: Optional[str] = None
    advance_paid: int = 0
    discount_amount: int = 0
    discount_reason: Optional[str] = None
    source: BookingSource = BookingSource.WALK_IN
    notes: Optional[str] = None
    is_hold: bool = False

    class Config:
        json_schema_extra = {
            'example': {
                'initiator': {
                    'user_id': 'user-7',
                    'name': 'Rahim',
                    'agency_id': 'agency-1',
                    'role': 'sales_agent',
                },
                'packages': [
                    {
                        'package_id': 'pkg-coxs-bazar',
                        'guests': [
                            {'name': 'Karim', 'phone': '01700000000', 'type': 'adult'},
                            {'name': 'Nila', 'type': 'child', 'age': 8, 'gender': 'female'},
                        ],
                        'boarding_point': 'Dhaka - Kallyanpur',
                        'dropping_point': 'Kolatoli',
                        'selected_seat_ids': ['L-C1', 'L-C2'],
                    }
                ],
                'payment_method': 'bkash',
                'transaction_id': '8N7A6D5C4B',
                'advance_paid': 3000,
                'discount_amount': 500,
            }
        }


class ConfirmHoldRequest(BaseModel):
    initiator: InitiatorRequest
    payment_method: PaymentMethod = PaymentMethod.CASH
    advance_paid: int
    transaction_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'initiator': {
                    'user_id': 'admin-1',
                    'name': 'Agency Admin',
                    'agency_id': 'agency-1',
                    'role': 'agency_admin',
                },
                'payment_method': 'cash',
                'advance_paid': 8500,
            }
        }


class PassengerResponse(BaseModel):
    name: str
    type: GuestType
    gender: Gender
    age: Optional[int] = None
    seat_id: Optional[str] = None
    seat_label: Optional[str] = None


class PaymentRecordResponse(BaseModel):
    method: PaymentMethod
    transaction_id: str
    amount: int
    paid_at: datetime
    collected_by: str


class BookingResponse(BaseModel):
    id: str
    booking_ref: str
    package_id: str
    agency_id: str
    package_title: str
    guest_name: str
    guest_phone: str
    boarding_point: str
    dropping_point: str
    passengers: List[PassengerResponse]
    selected_seat_ids: List[str]
    subtotal: int
    discount_amount: int
    discount_reason: Optional[str] = None
    total_amount: int
    advance_paid: int
    due_amount: int
    status: BookingStatus
    source: BookingSource
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    payment_history: List[PaymentRecordResponse]
    agent_id: Optional[str] = None
    agent_name: Optional[str] = None
    hold_expires_at: Optional[datetime] = None
    hold_created_by: Optional[HoldCreatedBy] = None
    hold_time_remaining: Optional[str] = None  # MM:SS or H:MM:SS
    hold_urgency: Optional[HoldUrgency] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CheckoutResponse(BaseModel):
    booking_refs: List[str]
    bookings: List[BookingResponse]
    subtotal_before_discount: int
    discount_amount: int
    grand_total: int
    advance_paid: int
    minimum_advance: int
    is_hold: bool
    hold_expires_at: Optional[datetime] = None


class ReleaseExpiredHoldsResponse(BaseModel):
    total_expired: int
    total_released: int
    expired_booking_ids: List[str]
    released_seat_ids: Dict[str, List[str]]
    skipped_seats: Dict[str, str]
