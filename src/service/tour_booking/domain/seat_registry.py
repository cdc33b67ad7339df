"""
Seat Registry

Read-side queries over a layout's seats. Nothing here mutates a seat; state
changes go through ``seat_state_machine``.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

import attrs

from src.platform.exception.exceptions import SeatCountMismatch, SeatUnavailable
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.seat_status import SeatStatus


@attrs.frozen
class AvailabilitySummary:
    total: int
    available: int
    booked: int  # booked + sold
    blocked: int


def group_seats_by_row(seats: Iterable[Seat]) -> Dict[str, List[Seat]]:
    grouped: Dict[str, List[Seat]] = {}
    for seat in seats:
        grouped.setdefault(seat.position.row, []).append(seat)
    for row_seats in grouped.values():
        row_seats.sort(key=lambda seat: seat.position.column)
    return grouped


def seats_by_deck(seats: Iterable[Seat], deck: Deck) -> List[Seat]:
    return [seat for seat in seats if seat.deck is deck]


def get_seat_by_id(seats: Iterable[Seat], seat_id: str) -> Optional[Seat]:
    return next((seat for seat in seats if seat.id == seat_id), None)


def count_by_status(seats: Iterable[Seat]) -> Dict[SeatStatus, int]:
    counts = Counter(seat.status for seat in seats)
    return {status: counts.get(status, 0) for status in SeatStatus}


def count_available(seats: Iterable[Seat]) -> int:
    return sum(1 for seat in seats if seat.status is SeatStatus.AVAILABLE)


def count_booked(seats: Iterable[Seat]) -> int:
    return sum(1 for seat in seats if seat.status.is_occupied)


def count_blocked(seats: Iterable[Seat]) -> int:
    return sum(1 for seat in seats if seat.status is SeatStatus.BLOCKED)


def availability_summary(layout: SeatLayout) -> AvailabilitySummary:
    counts = count_by_status(layout.seat_list)
    return AvailabilitySummary(
        total=layout.total_seats,
        available=counts[SeatStatus.AVAILABLE],
        booked=counts[SeatStatus.BOOKED] + counts[SeatStatus.SOLD],
        blocked=counts[SeatStatus.BLOCKED],
    )


def seats_held_for(layout: SeatLayout, booking_id: str) -> List[Seat]:
    return [seat for seat in layout.seat_list if seat.is_held and seat.held_for == booking_id]


def validate_selection(layout: SeatLayout, seat_ids: Sequence[str]) -> List[Seat]:
    """
    Resolve a selection against the current layout.

    Raises SeatCountMismatch for duplicated ids, UnknownSeat for ids the layout
    no longer has, and SeatUnavailable for seats that are not available.
    """
    duplicates = sorted(seat_id for seat_id, n in Counter(seat_ids).items() if n > 1)
    if duplicates:
        raise SeatCountMismatch(
            package_id=layout.package_id,
            message=f'Seats selected more than once for package {layout.package_id}: '
            f'{", ".join(duplicates)}',
        )

    seats = [layout.require_seat(seat_id) for seat_id in seat_ids]
    for seat in seats:
        if not seat.is_available:
            raise SeatUnavailable(seat.id)
    return seats
