"""
Unit tests for the per-seat outcome loop behind bulk block/unblock

Test Coverage:
1. Each seat succeeds or fails on its own against a real layout
2. Held seats refused by a plain unblock
3. Duplicate ids run once; unexpected errors propagate
"""

import pytest

from src.service.tour_booking.app.command.bulk_seat_update import update_each_seat
from src.service.tour_booking.domain import seat_state_machine
from src.service.tour_booking.domain.enum.guest import Gender
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from test.service.tour_booking.builders import make_layout


pytestmark = pytest.mark.unit


class TestUpdateEachSeat:
    def setup_method(self):
        self.layout = make_layout()

    async def _block(self, seat_id: str) -> None:
        seat_state_machine.apply(
            self.layout,
            seat_id=seat_id,
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BLOCKED,
            blocked_reason='Guide',
        )

    async def _unblock(self, seat_id: str) -> None:
        seat_state_machine.apply(
            self.layout,
            seat_id=seat_id,
            expected_status=SeatStatus.BLOCKED,
            new_status=SeatStatus.AVAILABLE,
        )

    @pytest.mark.asyncio
    async def test_each_seat_succeeds_or_fails_on_its_own(self):
        # Given: one seat already sold
        seat_state_machine.apply(
            self.layout,
            seat_id='L-A2',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.SOLD,
            booked_by=BookedBy(booking_id='booking-1', passenger_name='Karim', gender=Gender.MALE),
        )

        # When
        result = await update_each_seat(['L-A1', 'L-A2', 'L-Z1', 'L-A3'], self._block)

        # Then
        assert result.success is False
        assert result.succeeded_seat_ids == ['L-A1', 'L-A3']
        assert set(result.failed_seats) == {'L-A2', 'L-Z1'}
        assert self.layout.require_seat('L-A3').blocked_reason == 'Guide'

    @pytest.mark.asyncio
    async def test_unblock_leaves_held_seats_alone(self):
        # Given: an admin block and a hold
        await self._block('L-C1')
        seat_state_machine.apply(
            self.layout,
            seat_id='L-C2',
            expected_status=SeatStatus.AVAILABLE,
            new_status=SeatStatus.BLOCKED,
            held_for='booking-1',
        )

        # When
        result = await update_each_seat(['L-C1', 'L-C2'], self._unblock)

        # Then
        assert result.succeeded_seat_ids == ['L-C1']
        assert 'L-C2' in result.failed_seats
        assert self.layout.require_seat('L-C2').held_for == 'booking-1'

    @pytest.mark.asyncio
    async def test_duplicate_ids_run_once(self):
        seen = []

        async def record(seat_id: str) -> None:
            seen.append(seat_id)

        result = await update_each_seat(['L-A1', 'L-A2', 'L-A1'], record)

        assert seen == ['L-A1', 'L-A2']
        assert result.succeeded_seat_ids == ['L-A1', 'L-A2']

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self):
        async def broken(seat_id: str) -> None:
            raise RuntimeError('storage down')

        with pytest.raises(RuntimeError):
            await update_each_seat(['L-A1'], broken)
