"""
Unit tests for the seat state machine

Test Coverage:
1. Legal transitions and the fields each one sets/clears
2. Illegal transitions (SeatUnavailable vs InvalidSeatTransition)
3. Hold ownership on convert and release
4. Compare-and-swap against the aggregate
5. Booked or sold seats going straight back to their own hold
"""

import pytest

from src.platform.exception.exceptions import (
    InvalidSeatTransition,
    SeatUnavailable,
    UnknownSeat,
)
from src.service.tour_booking.domain import seat_state_machine
from src.service.tour_booking.domain.enum.guest import Gender
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from test.service.tour_booking.builders import NOW, make_layout


pytestmark = pytest.mark.unit


BOOKED_BY = BookedBy(booking_id='booking-1', passenger_name='Karim', gender=Gender.MALE)


class TestTransition:
    def setup_method(self):
        self.layout = make_layout()
        self.seat = self.layout.require_seat('L-A1')

    def test_available_to_booked_sets_owner(self):
        seat = seat_state_machine.transition(self.seat, SeatStatus.BOOKED, booked_by=BOOKED_BY)

        assert seat.status is SeatStatus.BOOKED
        assert seat.booked_by == BOOKED_BY
        assert seat.held_for is None

    def test_booked_requires_owner(self):
        with pytest.raises(ValueError, match='booked_by is required'):
            seat_state_machine.transition(self.seat, SeatStatus.SOLD)

    def test_admin_block_has_no_holder(self):
        seat = seat_state_machine.transition(
            self.seat, SeatStatus.BLOCKED, blocked_reason='Tour guide'
        )

        assert seat.status is SeatStatus.BLOCKED
        assert seat.blocked_reason == 'Tour guide'
        assert seat.is_held is False

    def test_booked_to_sold_is_refused_as_unavailable(self):
        # Given: a booked seat
        booked = seat_state_machine.transition(self.seat, SeatStatus.BOOKED, booked_by=BOOKED_BY)

        # When/Then: another claim on an occupied seat is a conflict
        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(booked, SeatStatus.SOLD, booked_by=BOOKED_BY)

    def test_available_to_available_is_invalid(self):
        with pytest.raises(InvalidSeatTransition, match='cannot move from available'):
            seat_state_machine.transition(self.seat, SeatStatus.AVAILABLE)

    def test_release_clears_every_owner_field(self):
        booked = seat_state_machine.transition(self.seat, SeatStatus.SOLD, booked_by=BOOKED_BY)

        released = seat_state_machine.transition(
            booked, SeatStatus.AVAILABLE, expected_holder='booking-1'
        )

        assert released.status is SeatStatus.AVAILABLE
        assert released.booked_by is None
        assert released.blocked_reason is None
        assert released.held_for is None

    def test_release_by_another_booking_is_refused(self):
        booked = seat_state_machine.transition(self.seat, SeatStatus.BOOKED, booked_by=BOOKED_BY)

        with pytest.raises(InvalidSeatTransition):
            seat_state_machine.transition(
                booked, SeatStatus.AVAILABLE, expected_holder='booking-2'
            )


class TestHoldOwnership:
    def setup_method(self):
        self.layout = make_layout()
        self.held = seat_state_machine.transition(
            self.layout.require_seat('L-A1'),
            SeatStatus.BLOCKED,
            blocked_reason='Hold 000001',
            held_for='booking-1',
        )

    def test_hold_converts_for_its_own_booking(self):
        seat = seat_state_machine.transition(
            self.held, SeatStatus.BOOKED, booked_by=BOOKED_BY, expected_holder='booking-1'
        )

        assert seat.status is SeatStatus.BOOKED
        assert seat.held_for is None
        assert seat.blocked_reason is None

    def test_hold_cannot_be_converted_by_another_booking(self):
        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(
                self.held, SeatStatus.SOLD, booked_by=BOOKED_BY, expected_holder='booking-2'
            )

    def test_admin_block_cannot_be_converted_to_a_sale(self):
        blocked = seat_state_machine.transition(
            self.layout.require_seat('L-A2'), SeatStatus.BLOCKED, blocked_reason='Driver'
        )

        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(
                blocked, SeatStatus.BOOKED, booked_by=BOOKED_BY, expected_holder='booking-1'
            )

    def test_held_seat_is_not_released_by_plain_unblock(self):
        with pytest.raises(InvalidSeatTransition):
            seat_state_machine.transition(self.held, SeatStatus.AVAILABLE)

    def test_held_seat_is_released_by_its_booking(self):
        seat = seat_state_machine.transition(
            self.held, SeatStatus.AVAILABLE, expected_holder='booking-1'
        )

        assert seat.is_available


class TestApply:
    def setup_method(self):
        self.layout = make_layout()

    def test_compare_and_swap_updates_aggregate(self):
        # When
        seat_state_machine.apply(
            self.layout,
            seat_id='L-B3',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BOOKED,
            booked_by=BOOKED_BY,
            now=NOW,
        )

        # Then
        assert self.layout.require_seat('L-B3').status is SeatStatus.BOOKED
        assert self.layout.last_updated == NOW

    def test_status_mismatch_changes_nothing(self):
        # Given: seat already booked
        seat_state_machine.apply(
            self.layout,
            seat_id='L-B3',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BOOKED,
            booked_by=BOOKED_BY,
        )

        # When/Then: a second claim loses
        with pytest.raises(SeatUnavailable, match='is booked, expected available'):
            seat_state_machine.apply(
                self.layout,
                seat_id='L-B3',
                expected_status=SeatStatus.AVAILABLE,
                new_status=SeatStatus.SOLD,
                booked_by=BookedBy(booking_id='other', passenger_name='X', gender=Gender.FEMALE),
            )
        assert self.layout.require_seat('L-B3').booked_by == BOOKED_BY

    def test_unknown_seat(self):
        with pytest.raises(UnknownSeat) as exc_info:
            seat_state_machine.apply(
                self.layout,
                seat_id='L-Z9',
                expected_status=SeatStatus.AVAILABLE,
                new_status=SeatStatus.BLOCKED,
            )

        assert exc_info.value.seat_id == 'L-Z9'
        assert exc_info.value.package_id == 'pkg-1'


class TestRestoreHold:
    def setup_method(self):
        self.layout = make_layout()
        self.sold = seat_state_machine.transition(
            self.layout.require_seat('L-A1'), SeatStatus.SOLD, booked_by=BOOKED_BY
        )

    def test_sale_goes_straight_back_to_its_own_hold(self):
        seat = seat_state_machine.transition(
            self.sold,
            SeatStatus.BLOCKED,
            blocked_reason='Hold 000001',
            held_for='booking-1',
            expected_holder='booking-1',
        )

        assert seat.status is SeatStatus.BLOCKED
        assert seat.held_for == 'booking-1'
        assert seat.blocked_reason == 'Hold 000001'
        assert seat.booked_by is None

    def test_compare_and_swap_never_passes_through_available(self):
        # Given: L-A1 booked for booking-1 in the aggregate
        seat_state_machine.apply(
            self.layout,
            seat_id='L-A1',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BOOKED,
            booked_by=BOOKED_BY,
        )

        # When
        seat_state_machine.apply(
            self.layout,
            seat_id='L-A1',
            expected_status=SeatStatus.BOOKED,
            new_status=SeatStatus.BLOCKED,
            blocked_reason='Hold 000001',
            held_for='booking-1',
            expected_holder='booking-1',
            now=NOW,
        )

        # Then
        assert self.layout.require_seat('L-A1').is_held

    def test_another_booking_cannot_take_the_sale_as_a_hold(self):
        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(
                self.sold,
                SeatStatus.BLOCKED,
                held_for='booking-2',
                expected_holder='booking-2',
            )

    def test_admin_block_of_a_sold_seat_is_refused(self):
        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(self.sold, SeatStatus.BLOCKED, blocked_reason='Driver')

    def test_hold_must_be_for_the_owning_booking(self):
        with pytest.raises(SeatUnavailable):
            seat_state_machine.transition(
                self.sold,
                SeatStatus.BLOCKED,
                held_for='booking-2',
                expected_holder='booking-1',
            )
