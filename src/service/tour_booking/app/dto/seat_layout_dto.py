"""
Seat Layout DTOs

Read model of a package's seat layout for the seat selection screen.
"""

from typing import Dict, List

import attrs

from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.seat_registry import AvailabilitySummary
from src.service.tour_booking.domain.value_object.row_shape import RowShape


@attrs.frozen
class DeckView:
    deck: Deck
    row_shapes: List[RowShape]
    rows: Dict[str, List[Seat]]


@attrs.frozen
class SeatLayoutView:
    layout: SeatLayout
    summary: AvailabilitySummary
    decks: List[DeckView]
