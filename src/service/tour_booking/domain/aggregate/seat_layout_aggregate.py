"""
Seat Layout Aggregate - Aggregate Root for one package's seats

[DDD Design Principles]
- SeatLayout is the Aggregate Root; Seat is an entity within it
- Seats are only replaced through the seat state machine
- Readers receive snapshots, never the stored aggregate

[Business Invariants]
- Seat ids are unique and fixed at generation time
- A seat id missing from the current layout is a stale selection, not a no-op
"""

from datetime import datetime
from typing import Dict, List, Optional

import attrs

from src.platform.exception.exceptions import UnknownSeat
from src.service.tour_booking.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.deck import Deck


@attrs.define
class SeatLayout:
    package_id: str
    bus_configuration: BusConfiguration
    # Keyed by seat id, insertion order is generation order
    seats: Dict[str, Seat] = attrs.field(factory=dict)
    last_updated: Optional[datetime] = None

    @classmethod
    def from_seats(
        cls,
        *,
        package_id: str,
        bus_configuration: BusConfiguration,
        seats: List[Seat],
        last_updated: Optional[datetime] = None,
    ) -> 'SeatLayout':
        return cls(
            package_id=package_id,
            bus_configuration=bus_configuration,
            seats={seat.id: seat for seat in seats},
            last_updated=last_updated,
        )

    @property
    def seat_list(self) -> List[Seat]:
        return list(self.seats.values())

    @property
    def total_seats(self) -> int:
        return len(self.seats)

    @property
    def decks(self) -> List[Deck]:
        return [Deck.LOWER, Deck.UPPER] if self.bus_configuration.is_double_decker else [Deck.LOWER]

    def get_seat(self, seat_id: str) -> Optional[Seat]:
        return self.seats.get(seat_id)

    def require_seat(self, seat_id: str) -> Seat:
        seat = self.seats.get(seat_id)
        if seat is None:
            raise UnknownSeat(package_id=self.package_id, seat_id=seat_id)
        return seat

    def snapshot(self) -> 'SeatLayout':
        return attrs.evolve(self, seats=dict(self.seats))

    def put_seat(self, seat: Seat, *, now: Optional[datetime] = None) -> None:
        """Store a transitioned seat. Only the seat state machine calls this."""
        self.require_seat(seat.id)
        self.seats[seat.id] = seat
        if now is not None:
            self.last_updated = now
