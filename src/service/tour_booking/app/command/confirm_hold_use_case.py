from datetime import datetime, timezone
from typing import List, Optional, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import HoldExpired, InvalidBookingState, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.checkout_dto import CheckoutInitiator
from src.service.tour_booking.app.dto.hold_dto import HoldPayment
from src.service.tour_booking.app.interface.i_agency_settings_query_repo import (
    IAgencySettingsQueryRepo,
)
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.domain import booking_allocation
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.tour_booking.domain.enum.guest import Gender
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from src.service.tour_booking.domain.value_object.payment_record import PaymentRecord


class ConfirmHoldUseCase:
    """
    Convert a seat hold into a sale once the guest pays.

    The booking is written first, compared against its stored hold status; a
    hold already expired or cancelled raises BookingStateConflict untouched.
    The held seats then move blocked -> booked (partial payment) or
    blocked -> sold (fully paid). If a seat conversion fails, converted seats
    go straight back to blocked for the booking and the booking returns to hold.
    """

    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        agency_settings_query_repo: IAgencySettingsQueryRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.agency_settings_query_repo = agency_settings_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_layout_command_repo: ISeatLayoutCommandRepo = Depends(
            Provide[Container.seat_layout_command_repo]
        ),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        agency_settings_query_repo: IAgencySettingsQueryRepo = Depends(
            Provide[Container.agency_settings_query_repo]
        ),
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
            agency_settings_query_repo=agency_settings_query_repo,
        )

    @Logger.io
    async def confirm(
        self,
        *,
        booking_id: str,
        payment: HoldPayment,
        initiator: CheckoutInitiator,
        now: Optional[datetime] = None,
    ) -> Booking:
        now = now or datetime.now(timezone.utc)
        with self.tracer.start_as_current_span(
            'use_case.confirm_hold', attributes={'booking.id': booking_id}
        ):
            booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
            if not booking:
                raise NotFoundError(f'Booking {booking_id} not found')
            if not booking.is_hold:
                raise InvalidBookingState(
                    f'Booking {booking.booking_ref} is {booking.status}, not on hold'
                )
            if booking.is_hold_expired(now):
                raise HoldExpired(f'Hold {booking.booking_ref} expired at {booking.hold_expires_at}')

            settings = await self.agency_settings_query_repo.load_agency_booking_settings(
                agency_id=booking.agency_id
            )
            booking_allocation.validate_amounts(
                subtotal_before_discount=booking.total_amount,
                discount_amount=0,
                advance_paid=payment.advance_paid,
                is_hold=False,
            )
            booking_allocation.check_minimum_advance(
                advance_paid=payment.advance_paid,
                grand_total=booking.total_amount,
                settings=settings,
            )
            booking_allocation.check_transaction_reference(
                payment_method=payment.payment_method,
                transaction_id=payment.transaction_id,
                settings=settings,
            )

            confirmed = booking.confirm_hold(
                payment=PaymentRecord(
                    method=payment.payment_method,
                    transaction_id=booking_allocation.resolve_transaction_id(
                        payment.transaction_id, now
                    ),
                    amount=payment.advance_paid,
                    paid_at=now,
                    collected_by=initiator.user_id,
                ),
                now=now,
            )
            new_status = (
                SeatStatus.SOLD
                if confirmed.payment_status is PaymentStatus.FULLY_PAID
                else SeatStatus.BOOKED
            )

            confirmed = await self.booking_command_repo.update_booking(
                booking=confirmed, expected_status=BookingStatus.HOLD
            )

            converted: List[str] = []
            try:
                for seat_id, passenger_name, gender in self._seat_owners(booking):
                    await self.seat_layout_command_repo.compare_and_swap_seat_status(
                        package_id=booking.package_id,
                        seat_id=seat_id,
                        expected_status=SeatStatus.BLOCKED,
                        new_status=new_status,
                        booked_by=BookedBy(
                            booking_id=booking.id, passenger_name=passenger_name, gender=gender
                        ),
                        expected_holder=booking.id,
                    )
                    converted.append(seat_id)
            except Exception:
                await self._restore_hold(
                    booking=booking,
                    seat_ids=converted,
                    claimed=new_status,
                    confirmed_status=confirmed.status,
                )
                raise

            Logger.base.info(
                f'✅ [HOLD] Confirmed hold {booking.booking_ref}: {confirmed.status}, '
                f'advance {confirmed.advance_paid}/{confirmed.total_amount}, '
                f'{len(converted)} seat(s) {new_status}'
            )
            return confirmed

    @staticmethod
    def _seat_owners(booking: Booking) -> List[Tuple[str, str, Gender]]:
        passengers = {p.seat_id: p for p in booking.passengers if p.seat_id}
        owners = []
        for seat_id in booking.selected_seat_ids:
            passenger = passengers.get(seat_id)
            name = passenger.name if passenger else booking.guest_name
            gender = passenger.gender if passenger else booking.passengers[0].gender
            owners.append((seat_id, name, gender))
        return owners

    async def _restore_hold(
        self,
        *,
        booking: Booking,
        seat_ids: List[str],
        claimed: SeatStatus,
        confirmed_status: BookingStatus,
    ) -> None:
        for seat_id in reversed(seat_ids):
            try:
                await self.seat_layout_command_repo.compare_and_swap_seat_status(
                    package_id=booking.package_id,
                    seat_id=seat_id,
                    expected_status=claimed,
                    new_status=SeatStatus.BLOCKED,
                    blocked_reason=f'Hold {booking.booking_ref}',
                    held_for=booking.id,
                    expected_holder=booking.id,
                )
            except Exception as e:
                Logger.base.error(
                    f'❌ [HOLD] Could not restore hold on seat {seat_id} for '
                    f'{booking.booking_ref}: {e}'
                )

        try:
            await self.booking_command_repo.update_booking(
                booking=booking, expected_status=confirmed_status
            )
        except Exception as e:
            Logger.base.error(f'❌ [HOLD] Could not put {booking.booking_ref} back on hold: {e}')
