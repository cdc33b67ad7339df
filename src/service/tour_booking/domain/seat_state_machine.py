"""
Seat State Machine

    available -> blocked          (admin block, or hold claim carrying held_for)
    available -> booked | sold    (carries booked_by)
    blocked   -> available        (unblock, hold release)
    blocked   -> booked | sold    (only the hold booking that owns the block)
    booked    -> available        (cancellation)
    sold      -> available        (cancellation)
    booked | sold -> blocked      (failed hold conversion, back to its own hold)

Leaving ``available`` requires the seat to be exactly ``available`` at the
time of the mutation; otherwise SeatUnavailable is raised and nothing changes.
A seat held for a booking is released or converted only by that booking.
``selected`` is never a persisted state.
"""

from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidSeatTransition, SeatUnavailable
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy


LEGAL_TRANSITIONS: dict[SeatStatus, frozenset[SeatStatus]] = {
    SeatStatus.AVAILABLE: frozenset({SeatStatus.BLOCKED, SeatStatus.BOOKED, SeatStatus.SOLD}),
    SeatStatus.BLOCKED: frozenset({SeatStatus.AVAILABLE, SeatStatus.BOOKED, SeatStatus.SOLD}),
    SeatStatus.BOOKED: frozenset({SeatStatus.AVAILABLE, SeatStatus.BLOCKED}),
    SeatStatus.SOLD: frozenset({SeatStatus.AVAILABLE, SeatStatus.BLOCKED}),
}


def _owner(seat: Seat) -> Optional[str]:
    if seat.status is SeatStatus.BLOCKED:
        return seat.held_for
    if seat.booked_by is not None:
        return seat.booked_by.booking_id
    return None


def transition(
    seat: Seat,
    new_status: SeatStatus,
    *,
    booked_by: Optional[BookedBy] = None,
    blocked_reason: Optional[str] = None,
    held_for: Optional[str] = None,
    expected_holder: Optional[str] = None,
) -> Seat:
    """
    Return the seat moved to ``new_status``.

    ``expected_holder`` is the booking id that must currently own the seat when
    converting a held seat or releasing a booked/held one.
    """
    if new_status not in LEGAL_TRANSITIONS[seat.status]:
        if seat.status is not SeatStatus.AVAILABLE and new_status is not SeatStatus.AVAILABLE:
            raise SeatUnavailable(seat.id)
        raise InvalidSeatTransition(seat_id=seat.id, current=seat.status, target=new_status)

    if seat.status is SeatStatus.BLOCKED and new_status in (SeatStatus.BOOKED, SeatStatus.SOLD):
        # Converting a hold: administrative blocks and other bookings' holds stay put
        if seat.held_for is None or seat.held_for != expected_holder:
            raise SeatUnavailable(seat.id)

    if new_status is SeatStatus.AVAILABLE:
        # A held seat is only released by its hold booking
        must_match = expected_holder is not None or seat.is_held
        if must_match and _owner(seat) != expected_holder:
            raise InvalidSeatTransition(
                seat_id=seat.id, current=f'{seat.status} ({_owner(seat)})', target=new_status
            )
        return attrs.evolve(
            seat, status=SeatStatus.AVAILABLE, booked_by=None, blocked_reason=None, held_for=None
        )

    if new_status is SeatStatus.BLOCKED:
        if seat.status is not SeatStatus.AVAILABLE:
            # Back to a hold: only the booking that owns the sale, for itself
            if expected_holder is None or not (_owner(seat) == held_for == expected_holder):
                raise SeatUnavailable(seat.id)
        return attrs.evolve(
            seat,
            status=SeatStatus.BLOCKED,
            booked_by=None,
            blocked_reason=blocked_reason,
            held_for=held_for,
        )

    if booked_by is None:
        raise ValueError(f'booked_by is required to mark seat {seat.id} as {new_status}')
    return attrs.evolve(
        seat, status=new_status, booked_by=booked_by, blocked_reason=None, held_for=None
    )


def apply(
    layout: SeatLayout,
    *,
    seat_id: str,
    expected_status: SeatStatus,
    new_status: SeatStatus,
    booked_by: Optional[BookedBy] = None,
    blocked_reason: Optional[str] = None,
    held_for: Optional[str] = None,
    expected_holder: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Seat:
    """Compare-and-swap one seat of the aggregate. Callers provide the atomicity."""
    seat = layout.require_seat(seat_id)
    if seat.status != expected_status:
        raise SeatUnavailable(
            seat_id, f'Seat {seat_id} is {seat.status}, expected {expected_status}'
        )
    new_seat = transition(
        seat,
        new_status,
        booked_by=booked_by,
        blocked_reason=blocked_reason,
        held_for=held_for,
        expected_holder=expected_holder,
    )
    layout.put_seat(new_seat, now=now)
    return new_seat

