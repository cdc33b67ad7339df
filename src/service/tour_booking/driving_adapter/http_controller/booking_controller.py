from datetime import datetime, timezone
from typing import List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.tour_booking.app.command.checkout_use_case import CheckoutUseCase
from src.service.tour_booking.app.command.confirm_hold_use_case import ConfirmHoldUseCase
from src.service.tour_booking.app.command.release_expired_holds_use_case import (
    ReleaseExpiredHoldsUseCase,
)
from src.service.tour_booking.app.dto.checkout_dto import (
    CheckoutInitiator,
    PackageBooking,
    PaymentDecision,
)
from src.service.tour_booking.app.dto.hold_dto import HoldPayment
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo
from src.service.tour_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.guest_entity import Guest
from src.service.tour_booking.domain.enum.guest import GuestType
from src.service.tour_booking.domain.hold_expiry_policy import (
    format_remaining,
    time_remaining,
    urgency,
)
from src.service.tour_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    CheckoutRequest,
    CheckoutResponse,
    ConfirmHoldRequest,
    GuestRequest,
    InitiatorRequest,
    PassengerResponse,
    PaymentRecordResponse,
    ReleaseExpiredHoldsResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_initiator(request: InitiatorRequest) -> CheckoutInitiator:
    return CheckoutInitiator(
        user_id=request.user_id,
        name=request.name,
        agency_id=request.agency_id,
        role=request.role,
    )


def _to_guest(request: GuestRequest) -> Guest:
    guest = Guest(
        name=request.name,
        phone=request.phone,
        email=request.email,
        nid=request.nid,
        emergency_contact=request.emergency_contact,
        age=request.age,
        type=request.type or GuestType.ADULT,
        gender=request.gender,
    )
    # An explicit type wins; otherwise the age picks the tier
    if request.type is None and request.age is not None:
        return guest.with_age(request.age)
    return guest


def _to_booking_response(booking: Booking) -> BookingResponse:
    hold_time_remaining = None
    hold_urgency = None
    if booking.is_hold and booking.hold_expires_at is not None:
        now = datetime.now(timezone.utc)
        hold_time_remaining = format_remaining(time_remaining(booking.hold_expires_at, now))
        hold_urgency = urgency(booking.hold_expires_at, now)

    return BookingResponse(
        id=booking.id,
        booking_ref=booking.booking_ref,
        package_id=booking.package_id,
        agency_id=booking.agency_id,
        package_title=booking.package_title,
        guest_name=booking.guest_name,
        guest_phone=booking.guest_phone,
        boarding_point=booking.boarding_point,
        dropping_point=booking.dropping_point,
        passengers=[
            PassengerResponse(
                name=passenger.name,
                type=passenger.type,
                gender=passenger.gender,
                age=passenger.age,
                seat_id=passenger.seat_id,
                seat_label=passenger.seat_label,
            )
            for passenger in booking.passengers
        ],
        selected_seat_ids=booking.selected_seat_ids,
        subtotal=booking.subtotal,
        discount_amount=booking.discount_amount,
        discount_reason=booking.discount_reason,
        total_amount=booking.total_amount,
        advance_paid=booking.advance_paid,
        due_amount=booking.due_amount,
        status=booking.status,
        source=booking.source,
        payment_method=booking.payment_method,
        payment_status=booking.payment_status,
        payment_history=[
            PaymentRecordResponse(
                method=record.method,
                transaction_id=record.transaction_id,
                amount=record.amount,
                paid_at=record.paid_at,
                collected_by=record.collected_by,
            )
            for record in booking.payment_history
        ],
        agent_id=booking.agent_id,
        agent_name=booking.agent_name,
        hold_expires_at=booking.hold_expires_at,
        hold_created_by=booking.hold_created_by,
        hold_time_remaining=hold_time_remaining,
        hold_urgency=hold_urgency,
        notes=booking.notes,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


@router.post('/checkout', status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def checkout(
    request: CheckoutRequest,
    use_case: CheckoutUseCase = Depends(CheckoutUseCase.depends),
    tour_package_repo: ITourPackageRepo = Depends(Provide[Container.tour_package_repo]),
) -> CheckoutResponse:
    with tracer.start_as_current_span('controller.checkout') as span:
        span.set_attribute('agency_id', request.initiator.agency_id)
        span.set_attribute('packages', len(request.packages))

        package_bookings: List[PackageBooking] = []
        for package_request in request.packages:
            package = await tour_package_repo.get_package(package_id=package_request.package_id)
            if not package:
                raise NotFoundError(f'Package {package_request.package_id} not found')
            package_bookings.append(
                PackageBooking(
                    package=package,
                    guests=[_to_guest(guest) for guest in package_request.guests],
                    boarding_point=package_request.boarding_point,
                    dropping_point=package_request.dropping_point,
                    custom_dropping_point=package_request.custom_dropping_point,
                    use_custom_dropping_point=package_request.use_custom_dropping_point,
                    selected_seat_ids=package_request.selected_seat_ids,
                )
            )

        result = await use_case.checkout(
            package_bookings=package_bookings,
            payment=PaymentDecision(
                payment_method=request.payment_method,
                transaction_id=request.transaction_id,
                advance_paid=request.advance_paid,
                discount_amount=request.discount_amount,
                discount_reason=request.discount_reason,
                source=request.source,
                notes=request.notes,
                is_hold=request.is_hold,
            ),
            initiator=_to_initiator(request.initiator),
        )
        span.set_attribute('booking_refs', result.booking_refs)

        return CheckoutResponse(
            booking_refs=result.booking_refs,
            bookings=[_to_booking_response(booking) for booking in result.bookings],
            subtotal_before_discount=result.subtotal_before_discount,
            discount_amount=result.discount_amount,
            grand_total=result.grand_total,
            advance_paid=result.advance_paid,
            minimum_advance=result.minimum_advance,
            is_hold=result.is_hold,
            hold_expires_at=result.hold_expires_at,
        )


@router.post('/holds/release-expired', status_code=status.HTTP_200_OK)
@Logger.io
async def release_expired_holds(
    use_case: ReleaseExpiredHoldsUseCase = Depends(ReleaseExpiredHoldsUseCase.depends),
) -> ReleaseExpiredHoldsResponse:
    """Scheduler hook: release seats of every expired hold"""
    result = await use_case.execute()
    return ReleaseExpiredHoldsResponse(
        total_expired=result.total_expired,
        total_released=result.total_released,
        expired_booking_ids=result.expired_booking_ids,
        released_seat_ids=result.released_seat_ids,
        skipped_seats=result.skipped_seats,
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: str,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    return _to_booking_response(await use_case.get_booking(booking_id=booking_id))


@router.post('/{booking_id}/confirm-hold', status_code=status.HTTP_200_OK)
@Logger.io
async def confirm_hold(
    booking_id: str,
    request: ConfirmHoldRequest,
    use_case: ConfirmHoldUseCase = Depends(ConfirmHoldUseCase.depends),
) -> BookingResponse:
    booking = await use_case.confirm(
        booking_id=booking_id,
        payment=HoldPayment(
            payment_method=request.payment_method,
            advance_paid=request.advance_paid,
            transaction_id=request.transaction_id,
        ),
        initiator=_to_initiator(request.initiator),
    )
    return _to_booking_response(booking)


@router.post('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: str,
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    return _to_booking_response(await use_case.cancel(booking_id=booking_id))
