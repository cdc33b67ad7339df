from datetime import datetime, timezone
from typing import Dict, List, Optional, Self, Tuple

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import EmptySelection, SeatCountMismatch
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.checkout_dto import (
    CheckoutInitiator,
    CheckoutResult,
    PackageBooking,
    PaymentDecision,
)
from src.service.tour_booking.app.interface.i_agency_settings_query_repo import (
    IAgencySettingsQueryRepo,
)
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.domain import booking_allocation
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.booking_allocation import PackageAllocation
from src.service.tour_booking.domain.entity.booking_entity import Booking, Passenger
from src.service.tour_booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.tour_booking.domain.enum.guest import GuestType
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.hold_expiry_policy import hold_expires_at
from src.service.tour_booking.domain.seat_registry import validate_selection
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from src.service.tour_booking.domain.value_object.payment_record import PaymentRecord


@attrs.frozen
class _SeatClaim:
    package_id: str
    seat_id: str
    booking_id: str
    claimed_status: SeatStatus


class CheckoutUseCase:
    """
    Multi-package checkout - one guest transaction, one Booking per package

    Flow:
    1. Validate everything before touching a seat:
       empty selection -> hold permission -> amounts -> seat counts ->
       seat existence/availability -> minimum advance -> transaction reference
    2. Split discount and advance across packages proportionally
    3. Claim every seat of every package via compare-and-swap
       (hold: available -> blocked, paid: available -> booked/sold)
    4. Persist the bookings

    All-or-nothing: if any claim or write fails, every seat already claimed by
    this checkout is released and bookings already written are removed before
    the error propagates.
    """

    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        seat_layout_query_repo: ISeatLayoutQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        agency_settings_query_repo: IAgencySettingsQueryRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.seat_layout_query_repo = seat_layout_query_repo
        self.booking_command_repo = booking_command_repo
        self.agency_settings_query_repo = agency_settings_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_layout_command_repo: ISeatLayoutCommandRepo = Depends(
            Provide[Container.seat_layout_command_repo]
        ),
        seat_layout_query_repo: ISeatLayoutQueryRepo = Depends(
            Provide[Container.seat_layout_query_repo]
        ),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        agency_settings_query_repo: IAgencySettingsQueryRepo = Depends(
            Provide[Container.agency_settings_query_repo]
        ),
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            seat_layout_query_repo=seat_layout_query_repo,
            booking_command_repo=booking_command_repo,
            agency_settings_query_repo=agency_settings_query_repo,
        )

    @Logger.io
    async def checkout(
        self,
        *,
        package_bookings: List[PackageBooking],
        payment: PaymentDecision,
        initiator: CheckoutInitiator,
        now: Optional[datetime] = None,
    ) -> CheckoutResult:
        now = now or datetime.now(timezone.utc)
        with self.tracer.start_as_current_span(
            'use_case.checkout',
            attributes={
                'agency.id': initiator.agency_id,
                'checkout.packages': len(package_bookings),
                'checkout.is_hold': payment.is_hold,
            },
        ):
            Logger.base.info(
                f'🧾 [CHECKOUT] {initiator.role} {initiator.user_id} submitting '
                f'{len(package_bookings)} package(s), hold={payment.is_hold}'
            )

            # Step 1: validation, nothing is mutated before this completes
            if not package_bookings:
                raise EmptySelection('Select at least one package')
            for package_booking in package_bookings:
                if not package_booking.named_guests:
                    raise EmptySelection(
                        f'Package {package_booking.package_id} must have at least one named guest'
                    )

            settings = await self.agency_settings_query_repo.load_agency_booking_settings(
                agency_id=initiator.agency_id
            )
            if payment.is_hold:
                booking_allocation.check_hold_permission(initiator.role, settings)

            subtotals = [package_booking.subtotal for package_booking in package_bookings]
            booking_allocation.validate_amounts(
                subtotal_before_discount=sum(subtotals),
                discount_amount=payment.discount_amount,
                advance_paid=payment.advance_paid,
                is_hold=payment.is_hold,
            )

            layouts = await self._load_and_validate_seats(package_bookings)

            totals = booking_allocation.allocate(
                subtotals=subtotals,
                discount_amount=payment.discount_amount,
                advance_paid=payment.advance_paid,
                is_hold=payment.is_hold,
            )
            minimum_advance = booking_allocation.minimum_advance(totals.grand_total, settings)
            if not payment.is_hold:
                booking_allocation.check_minimum_advance(
                    advance_paid=payment.advance_paid,
                    grand_total=totals.grand_total,
                    settings=settings,
                )
                booking_allocation.check_transaction_reference(
                    payment_method=payment.payment_method,
                    transaction_id=payment.transaction_id,
                    settings=settings,
                )

            # Step 2: build one booking per package
            expires_at = (
                hold_expires_at(now, settings.hold_duration_minutes) if payment.is_hold else None
            )
            bookings: List[Booking] = []
            for package_booking, allocation in zip(package_bookings, totals.allocations):
                bookings.append(
                    await self._build_booking(
                        package_booking=package_booking,
                        allocation=allocation,
                        layout=layouts.get(package_booking.package_id),
                        payment=payment,
                        initiator=initiator,
                        hold_expires_at=expires_at,
                        now=now,
                    )
                )

            # Step 3 + 4: claim seats and persist, or undo everything
            claims: List[_SeatClaim] = []
            created: List[Booking] = []
            try:
                for package_booking, booking in zip(package_bookings, bookings):
                    await self._claim_seats(
                        package_booking=package_booking, booking=booking, claims=claims
                    )
                for booking in bookings:
                    created.append(await self.booking_command_repo.create_booking(booking=booking))
            except Exception:
                await self._rollback(claims=claims, created=created)
                raise

            Logger.base.info(
                f'✅ [CHECKOUT] Created {len(created)} booking(s) '
                f'{", ".join(booking.booking_ref for booking in created)}, '
                f'grand total {totals.grand_total}, advance {totals.advance_paid}'
            )
            return CheckoutResult(
                bookings=created,
                subtotal_before_discount=totals.subtotal_before_discount,
                discount_amount=totals.discount_amount,
                grand_total=totals.grand_total,
                advance_paid=totals.advance_paid,
                minimum_advance=minimum_advance,
                is_hold=payment.is_hold,
                hold_expires_at=expires_at,
            )

    async def _load_and_validate_seats(
        self, package_bookings: List[PackageBooking]
    ) -> Dict[str, SeatLayout]:
        layouts: Dict[str, SeatLayout] = {}
        for package_booking in package_bookings:
            package_id = package_booking.package_id
            guest_count = len(package_booking.named_guests)
            selected = package_booking.selected_seat_ids

            if package_id not in layouts:
                layout = await self.seat_layout_query_repo.load_seat_layout(package_id=package_id)
                if layout is not None:
                    layouts[package_id] = layout

            if package_id not in layouts:
                if selected:
                    raise SeatCountMismatch(
                        package_id=package_id,
                        message=f'Package {package_id} has no seat layout, seats cannot be selected',
                    )
                continue

            if len(selected) != guest_count:
                raise SeatCountMismatch(
                    package_id=package_id,
                    message=f'Select {guest_count} seat(s) for package '
                    f'{package_booking.package.destination or package_id}, got {len(selected)}',
                )

        # The same package may appear twice in one checkout; a seat is claimable once
        seen: set[Tuple[str, str]] = set()
        for package_booking in package_bookings:
            layout = layouts.get(package_booking.package_id)
            if layout is None:
                continue
            validate_selection(layout, package_booking.selected_seat_ids)
            for seat_id in package_booking.selected_seat_ids:
                key = (package_booking.package_id, seat_id)
                if key in seen:
                    raise SeatCountMismatch(
                        package_id=package_booking.package_id,
                        message=f'Seat {seat_id} is selected twice in this checkout',
                    )
                seen.add(key)
        return layouts

    async def _build_booking(
        self,
        *,
        package_booking: PackageBooking,
        allocation: PackageAllocation,
        layout: Optional[SeatLayout],
        payment: PaymentDecision,
        initiator: CheckoutInitiator,
        hold_expires_at: Optional[datetime],
        now: datetime,
    ) -> Booking:
        guests = package_booking.named_guests
        lead = guests[0]
        seat_ids = package_booking.selected_seat_ids
        passengers = []
        for index, guest in enumerate(guests):
            seat_id = seat_ids[index] if index < len(seat_ids) else None
            seat = layout.get_seat(seat_id) if layout is not None and seat_id else None
            passengers.append(
                Passenger(
                    name=guest.name.strip(),
                    type=GuestType.ADULT if guest.type is GuestType.COUPLE else guest.type,
                    gender=guest.gender,
                    age=guest.age,
                    seat_id=seat_id,
                    seat_label=seat.label if seat else None,
                )
            )

        if payment.is_hold:
            status = BookingStatus.HOLD
            payment_method = PaymentMethod.CASH
            payment_history: List[PaymentRecord] = []
        else:
            fully_paid = (
                PaymentStatus.from_amounts(
                    total_amount=allocation.final_amount, advance_paid=allocation.advance_paid
                )
                is PaymentStatus.FULLY_PAID
            )
            status = BookingStatus.CONFIRMED if fully_paid else BookingStatus.PENDING
            payment_method = payment.payment_method
            payment_history = [
                PaymentRecord(
                    method=payment.payment_method,
                    transaction_id=booking_allocation.resolve_transaction_id(
                        payment.transaction_id, now
                    ),
                    amount=allocation.advance_paid,
                    paid_at=now,
                    collected_by=initiator.user_id,
                )
            ]

        return Booking.create(
            id=str(uuid_utils.uuid7()),
            booking_ref=await self.booking_command_repo.next_booking_ref(
                agency_id=initiator.agency_id
            ),
            package_id=package_booking.package_id,
            agency_id=initiator.agency_id,
            package_title=package_booking.package.title,
            guest_name=lead.name.strip(),
            guest_phone=lead.phone,
            guest_email=lead.email,
            guest_nid=lead.nid,
            emergency_contact=lead.emergency_contact,
            boarding_point=package_booking.boarding_point,
            dropping_point=package_booking.effective_dropping_point,
            passengers=passengers,
            selected_seat_ids=seat_ids,
            subtotal=allocation.subtotal,
            discount_amount=allocation.discount_amount,
            discount_reason=payment.discount_reason,
            advance_paid=allocation.advance_paid,
            status=status,
            source=payment.source,
            payment_method=payment_method,
            payment_history=payment_history,
            agent_id=initiator.user_id if initiator.is_agent else None,
            agent_name=initiator.name,
            hold_expires_at=hold_expires_at,
            hold_created_by=initiator.hold_created_by if payment.is_hold else None,
            notes=payment.notes,
            now=now,
        )

    async def _claim_seats(
        self, *, package_booking: PackageBooking, booking: Booking, claims: List[_SeatClaim]
    ) -> None:
        if booking.is_hold:
            new_status = SeatStatus.BLOCKED
        elif booking.payment_status is PaymentStatus.FULLY_PAID:
            new_status = SeatStatus.SOLD
        else:
            new_status = SeatStatus.BOOKED

        for seat_id, guest in zip(package_booking.selected_seat_ids, package_booking.named_guests):
            if booking.is_hold:
                await self.seat_layout_command_repo.compare_and_swap_seat_status(
                    package_id=booking.package_id,
                    seat_id=seat_id,
                    expected_status=SeatStatus.AVAILABLE,
                    new_status=new_status,
                    blocked_reason=f'Hold {booking.booking_ref}',
                    held_for=booking.id,
                )
            else:
                await self.seat_layout_command_repo.compare_and_swap_seat_status(
                    package_id=booking.package_id,
                    seat_id=seat_id,
                    expected_status=SeatStatus.AVAILABLE,
                    new_status=new_status,
                    booked_by=BookedBy(
                        booking_id=booking.id,
                        passenger_name=guest.name.strip(),
                        gender=guest.gender,
                    ),
                )
            claims.append(
                _SeatClaim(
                    package_id=booking.package_id,
                    seat_id=seat_id,
                    booking_id=booking.id,
                    claimed_status=new_status,
                )
            )

    async def _rollback(self, *, claims: List[_SeatClaim], created: List[Booking]) -> None:
        Logger.base.warning(
            f'↩️ [CHECKOUT] Rolling back {len(claims)} seat claim(s) and {len(created)} booking(s)'
        )
        for claim in reversed(claims):
            try:
                await self.seat_layout_command_repo.compare_and_swap_seat_status(
                    package_id=claim.package_id,
                    seat_id=claim.seat_id,
                    expected_status=claim.claimed_status,
                    new_status=SeatStatus.AVAILABLE,
                    expected_holder=claim.booking_id,
                )
            except Exception as e:
                # Keep releasing the rest; the original failure is re-raised by the caller
                Logger.base.error(
                    f'❌ [CHECKOUT] Could not release seat {claim.seat_id} of package '
                    f'{claim.package_id}: {e}'
                )
        for booking in created:
            try:
                await self.booking_command_repo.delete_booking(booking_id=booking.id)
            except Exception as e:
                Logger.base.error(f'❌ [CHECKOUT] Could not remove booking {booking.id}: {e}')
