"""
Layout Generator

Turns a declarative BusConfiguration into the ordered seat list of a vehicle.

Rows run from ``serial_start`` to ``serial_end`` by character code. A row uses
the deck's base arrangement with ``seats_per_serial`` seats, replaced by the
first-row override on the first row and then by the last-row override on the
last row, so on a single-row deck the last-row override wins. An override seat
count falls back to the canonical count of the override arrangement, and a
count-only override keeps the base arrangement.

The total seat count is always ``len(generate(config))``.
"""

from datetime import datetime, timezone
from typing import List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.bus_configuration_entity import (
    BusConfiguration,
    FloorConfiguration,
)
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.enum.vehicle import AcType, BusBrand, VehicleCategory
from src.service.tour_booking.domain.value_object.row_shape import RowShape
from src.service.tour_booking.domain.value_object.seat_position import SeatPosition


SERIAL_OPTIONS: List[str] = [chr(code) for code in range(ord('A'), ord('K') + 1)]


def serial_options() -> List[str]:
    """Row letters a layout editor offers for ``serial_start`` / ``serial_end``"""
    return list(SERIAL_OPTIONS)


def seat_id_for(deck: Deck, row: str, column: int) -> str:
    return f'{deck.prefix}-{row}{column}'


def row_shapes(floor: FloorConfiguration) -> List[RowShape]:
    letters = floor.row_letters
    shapes: List[RowShape] = []
    for index, row in enumerate(letters):
        arrangement = floor.arrangement
        seat_count = floor.seats_per_serial

        if index == 0 and floor.has_first_row_override:
            arrangement = floor.first_row_layout or floor.arrangement
            seat_count = floor.first_row_seats or arrangement.seats_per_row

        if index == len(letters) - 1 and floor.has_last_row_override:
            arrangement = floor.last_row_layout or floor.arrangement
            seat_count = floor.last_row_seats or arrangement.seats_per_row

        left_columns = min(seat_count, arrangement.left_columns)
        shapes.append(
            RowShape(
                row=row,
                arrangement=arrangement,
                seat_count=seat_count,
                left_columns=left_columns,
                right_columns=seat_count - left_columns,
            )
        )
    return shapes


def generate_deck(deck: Deck, floor: FloorConfiguration) -> List[Seat]:
    return [
        Seat(
            id=seat_id_for(deck, shape.row, column),
            deck=deck,
            position=SeatPosition(row=shape.row, column=column),
            label=f'{shape.row}{column}',
        )
        for shape in row_shapes(floor)
        for column in range(1, shape.seat_count + 1)
    ]


def generate(config: BusConfiguration) -> List[Seat]:
    seats = generate_deck(Deck.LOWER, config.lower_deck)
    if config.is_double_decker and config.upper_deck is not None:
        seats.extend(generate_deck(Deck.UPPER, config.upper_deck))
    return seats


def total_seats(config: BusConfiguration) -> int:
    return len(generate(config))


@Logger.io
def create_seat_layout(
    *, package_id: str, config: BusConfiguration, now: Optional[datetime] = None
) -> SeatLayout:
    seats = generate(config)
    Logger.base.info(
        f'🪑 [LAYOUT] Generated {len(seats)} seats for package {package_id} '
        f'({config.vehicle_category}, {config.number_of_floors} floor(s))'
    )
    return SeatLayout.from_seats(
        package_id=package_id,
        bus_configuration=config,
        seats=seats,
        last_updated=now or datetime.now(timezone.utc),
    )


def default_floor_configuration() -> FloorConfiguration:
    return FloorConfiguration(
        arrangement=SeatArrangement.TWO_BY_TWO,
        serial_start='A',
        serial_end='K',
        seats_per_serial=4,
        last_row_seats=5,  # common rear bench
    )


def default_bus_configuration(
    vehicle_category: VehicleCategory = VehicleCategory.BUS,
) -> BusConfiguration:
    return BusConfiguration(
        vehicle_category=vehicle_category,
        number_of_floors=1,
        ac_type=AcType.AC,
        brand=BusBrand.HINO,
        lower_deck=default_floor_configuration(),
    )
