"""
Unit tests for hold conversion, cancellation and hold expiry

Test Focus:
1. ConfirmHoldUseCase: blocked -> sold/booked for the hold's own booking, restore on failure
2. CancelBookingUseCase: release seats still owned by the booking
3. ReleaseExpiredHoldsUseCase: expire only holds past their deadline
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import (
    BookingStateConflict,
    HoldExpired,
    InsufficientAdvance,
    InvalidBookingState,
    MissingTransactionReference,
    NotFoundError,
    SeatUnavailable,
)
from src.service.tour_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.tour_booking.app.command.confirm_hold_use_case import ConfirmHoldUseCase
from src.service.tour_booking.app.command.release_expired_holds_use_case import (
    ReleaseExpiredHoldsUseCase,
)
from src.service.tour_booking.app.dto.hold_dto import HoldPayment
from src.service.tour_booking.domain import seat_state_machine
from src.service.tour_booking.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.tour_booking.domain.enum.guest import Gender
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from test.service.tour_booking.builders import NOW, admin, make_booking, make_layout
from test.service.tour_booking.unit.use_case.repository_mocks import RepositoryMocks


pytestmark = pytest.mark.unit


class TestConfirmHold:
    def setup_method(self):
        self.mocks = RepositoryMocks()
        self.hold = make_booking()
        self.mocks.booking_query_repo.get_by_id.return_value = self.hold
        self.use_case = ConfirmHoldUseCase(
            seat_layout_command_repo=self.mocks.seat_layout_command_repo,
            booking_command_repo=self.mocks.booking_command_repo,
            booking_query_repo=self.mocks.booking_query_repo,
            agency_settings_query_repo=self.mocks.agency_settings_query_repo,
        )

    @pytest.mark.asyncio
    async def test_full_payment_sells_held_seats(self):
        # When
        confirmed = await self.use_case.confirm(
            booking_id='booking-1',
            payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=10000),
            initiator=admin(),
            now=NOW,
        )

        # Then
        assert confirmed.status is BookingStatus.CONFIRMED
        assert confirmed.payment_status is PaymentStatus.FULLY_PAID
        assert confirmed.hold_expires_at is None
        calls = self.mocks.cas_calls
        assert [call['seat_id'] for call in calls] == ['L-A1', 'L-A2']
        for call in calls:
            assert call['expected_status'] is SeatStatus.BLOCKED
            assert call['new_status'] is SeatStatus.SOLD
            assert call['expected_holder'] == 'booking-1'
        assert calls[1]['booked_by'] == BookedBy(
            booking_id='booking-1', passenger_name='Rahima', gender=Gender.FEMALE
        )
        self.mocks.booking_command_repo.update_booking.assert_awaited_once()
        assert self.mocks.booking_updates[0]['expected_status'] is BookingStatus.HOLD

    @pytest.mark.asyncio
    async def test_partial_payment_books_held_seats(self):
        confirmed = await self.use_case.confirm(
            booking_id='booking-1',
            payment=HoldPayment(
                payment_method=PaymentMethod.BKASH, advance_paid=3000, transaction_id='TX-77'
            ),
            initiator=admin(),
            now=NOW,
        )

        assert confirmed.status is BookingStatus.PENDING
        assert confirmed.payment_history[0].transaction_id == 'TX-77'
        assert {call['new_status'] for call in self.mocks.cas_calls} == {SeatStatus.BOOKED}

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        self.mocks.booking_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.use_case.confirm(
                booking_id='missing',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=10000),
                initiator=admin(),
                now=NOW,
            )

    @pytest.mark.asyncio
    async def test_booking_not_on_hold(self):
        self.mocks.booking_query_repo.get_by_id.return_value = make_booking(
            status=BookingStatus.PENDING, advance_paid=2000
        )

        with pytest.raises(InvalidBookingState):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=8000),
                initiator=admin(),
                now=NOW,
            )

    @pytest.mark.asyncio
    async def test_expired_hold_cannot_be_confirmed(self):
        with pytest.raises(HoldExpired):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=10000),
                initiator=admin(),
                now=NOW + timedelta(minutes=60),
            )
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_payment_rules_apply(self):
        with pytest.raises(InsufficientAdvance):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=999),
                initiator=admin(),
                now=NOW,
            )
        with pytest.raises(MissingTransactionReference):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CARD, advance_paid=5000),
                initiator=admin(),
                now=NOW,
            )

    @pytest.mark.asyncio
    async def test_failed_conversion_puts_seats_back_on_hold(self):
        """
        Given: L-A1 converts but L-A2 was taken from the hold
        Then: L-A1 goes straight back to blocked and the booking back to hold
        """
        # Given
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.side_effect = [
            None,
            SeatUnavailable('L-A2'),
            None,
        ]

        # When
        with pytest.raises(SeatUnavailable):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=10000),
                initiator=admin(),
                now=NOW,
            )

        # Then
        restores = self.mocks.cas_calls[2:]
        assert restores == [
            {
                'package_id': 'pkg-1',
                'seat_id': 'L-A1',
                'expected_status': SeatStatus.SOLD,
                'new_status': SeatStatus.BLOCKED,
                'blocked_reason': 'Hold 000001',
                'held_for': 'booking-1',
                'expected_holder': 'booking-1',
            }
        ]
        updates = self.mocks.booking_updates
        assert [u['expected_status'] for u in updates] == [
            BookingStatus.HOLD,
            BookingStatus.CONFIRMED,
        ]
        assert updates[1]['booking'] is self.hold

    @pytest.mark.asyncio
    async def test_hold_changed_concurrently_leaves_seats_alone(self):
        # Given: the stored booking is no longer a hold
        self.mocks.booking_command_repo.update_booking.side_effect = BookingStateConflict(
            booking_id='booking-1', expected=BookingStatus.HOLD, actual=BookingStatus.EXPIRED
        )

        # When
        with pytest.raises(BookingStateConflict):
            await self.use_case.confirm(
                booking_id='booking-1',
                payment=HoldPayment(payment_method=PaymentMethod.CASH, advance_paid=10000),
                initiator=admin(),
                now=NOW,
            )

        # Then
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.assert_not_awaited()


class TestCancelBooking:
    def setup_method(self):
        # Given: L-A1 booked by booking-1, L-A2 already released elsewhere
        layout = make_layout()
        seat_state_machine.apply(
            layout,
            seat_id='L-A1',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BOOKED,
            booked_by=BookedBy(booking_id='booking-1', passenger_name='Karim', gender=Gender.MALE),
        )
        self.mocks = RepositoryMocks(layouts=[layout])
        self.mocks.booking_query_repo.get_by_id.return_value = make_booking(
            status=BookingStatus.PENDING, advance_paid=2000
        )
        self.use_case = CancelBookingUseCase(
            seat_layout_command_repo=self.mocks.seat_layout_command_repo,
            seat_layout_query_repo=self.mocks.seat_layout_query_repo,
            booking_command_repo=self.mocks.booking_command_repo,
            booking_query_repo=self.mocks.booking_query_repo,
        )

    @pytest.mark.asyncio
    async def test_releases_only_seats_still_occupied(self):
        cancelled = await self.use_case.cancel(booking_id='booking-1', now=NOW)

        assert cancelled.status is BookingStatus.CANCELLED
        assert self.mocks.cas_calls == [
            {
                'package_id': 'pkg-1',
                'seat_id': 'L-A1',
                'expected_status': SeatStatus.BOOKED,
                'new_status': SeatStatus.AVAILABLE,
                'expected_holder': 'booking-1',
            }
        ]

    @pytest.mark.asyncio
    async def test_seat_release_conflict_does_not_block_cancellation(self):
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.side_effect = (
            SeatUnavailable('L-A1')
        )

        cancelled = await self.use_case.cancel(booking_id='booking-1', now=NOW)

        assert cancelled.status is BookingStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_cancellation_is_written_against_the_read_status(self):
        await self.use_case.cancel(booking_id='booking-1', now=NOW)

        assert self.mocks.booking_updates[0]['expected_status'] is BookingStatus.PENDING

    @pytest.mark.asyncio
    async def test_booking_changed_concurrently_keeps_its_seats(self):
        # Given: the booking was confirmed after it was read
        self.mocks.booking_command_repo.update_booking.side_effect = BookingStateConflict(
            booking_id='booking-1', expected=BookingStatus.PENDING, actual=BookingStatus.CONFIRMED
        )

        # When
        with pytest.raises(BookingStateConflict):
            await self.use_case.cancel(booking_id='booking-1', now=NOW)

        # Then
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_booking_cannot_be_cancelled(self):
        self.mocks.booking_query_repo.get_by_id.return_value = make_booking().expire(now=NOW)

        with pytest.raises(InvalidBookingState):
            await self.use_case.cancel(booking_id='booking-1', now=NOW)

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        self.mocks.booking_query_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await self.use_case.cancel(booking_id='missing', now=NOW)


class TestReleaseExpiredHolds:
    def setup_method(self):
        self.mocks = RepositoryMocks()
        self.mocks.booking_query_repo.list_by_status.return_value = [
            make_booking(booking_id='expired-1', hold_minutes=30),
            make_booking(booking_id='fresh-1', booking_ref='000002', hold_minutes=120),
        ]
        self.use_case = ReleaseExpiredHoldsUseCase(
            seat_layout_command_repo=self.mocks.seat_layout_command_repo,
            booking_command_repo=self.mocks.booking_command_repo,
            booking_query_repo=self.mocks.booking_query_repo,
        )

    @pytest.mark.asyncio
    async def test_only_past_deadline_holds_expire(self):
        # When
        result = await self.use_case.execute(now=NOW + timedelta(minutes=61))

        # Then
        assert result.expired_booking_ids == ['expired-1']
        assert result.released_seat_ids == {'expired-1': ['L-A1', 'L-A2']}
        assert all(call['expected_holder'] == 'expired-1' for call in self.mocks.cas_calls)
        updated = self.mocks.booking_command_repo.update_booking.call_args.kwargs['booking']
        assert updated.status is BookingStatus.EXPIRED
        assert self.mocks.booking_updates[0]['expected_status'] is BookingStatus.HOLD
        self.mocks.booking_query_repo.list_by_status.assert_awaited_once_with(
            status=BookingStatus.HOLD
        )

    @pytest.mark.asyncio
    async def test_seat_no_longer_held_is_skipped(self):
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.side_effect = [
            None,
            SeatUnavailable('L-A2'),
        ]

        result = await self.use_case.execute(now=NOW + timedelta(minutes=61))

        assert result.released_seat_ids == {'expired-1': ['L-A1']}
        assert 'L-A2' in result.skipped_seats
        assert result.total_released == 1

    @pytest.mark.asyncio
    async def test_nothing_expired(self):
        result = await self.use_case.execute(now=NOW)

        assert result.total_expired == 0
        self.mocks.booking_command_repo.update_booking.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_hold_confirmed_concurrently_is_left_alone(self):
        # Given: expired-1 was confirmed between the listing and the expiry write
        self.mocks.booking_command_repo.update_booking.side_effect = BookingStateConflict(
            booking_id='expired-1', expected=BookingStatus.HOLD, actual=BookingStatus.CONFIRMED
        )

        # When
        result = await self.use_case.execute(now=NOW + timedelta(minutes=61))

        # Then
        assert result.total_expired == 0
        assert result.released_seat_ids == {}
        self.mocks.seat_layout_command_repo.compare_and_swap_seat_status.assert_not_awaited()
