"""
Bus Configuration - declarative description of a vehicle's seating

A configuration is only ever authored; seat ids and the total seat count are
always derived from it by the layout generator.
"""

from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidConfiguration
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.enum.vehicle import AcType, BusBrand, VehicleCategory


def _validate_row_letter(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1 or not ('A' <= value <= 'Z'):
        raise InvalidConfiguration(f'{attribute.name} must be a single row letter A-Z, got {value!r}')


def _validate_positive_count(instance: object, attribute: attrs.Attribute, value: Optional[int]) -> None:
    if value is not None and value < 1:
        raise InvalidConfiguration(f'{attribute.name} must be a positive seat count, got {value}')


def _to_arrangement(value: str | SeatArrangement) -> SeatArrangement:
    try:
        return SeatArrangement(value)
    except ValueError:
        raise InvalidConfiguration(f'Unknown seat arrangement: {value!r}')


def _to_optional_arrangement(value: str | SeatArrangement | None) -> Optional[SeatArrangement]:
    return None if value is None else _to_arrangement(value)


@attrs.frozen
class FloorConfiguration:
    """One deck's layout rule: base row shape plus optional first/last row overrides"""

    arrangement: SeatArrangement = attrs.field(converter=_to_arrangement)
    serial_start: str = attrs.field(default='A', validator=_validate_row_letter)
    serial_end: str = attrs.field(default='K', validator=_validate_row_letter)
    seats_per_serial: int = attrs.field(
        default=attrs.Factory(lambda self: self.arrangement.seats_per_row, takes_self=True),
        validator=_validate_positive_count,
    )
    first_row_layout: Optional[SeatArrangement] = attrs.field(
        default=None, converter=_to_optional_arrangement
    )
    first_row_seats: Optional[int] = attrs.field(default=None, validator=_validate_positive_count)
    last_row_layout: Optional[SeatArrangement] = attrs.field(
        default=None, converter=_to_optional_arrangement
    )
    last_row_seats: Optional[int] = attrs.field(default=None, validator=_validate_positive_count)

    def __attrs_post_init__(self) -> None:
        if self.serial_start > self.serial_end:
            raise InvalidConfiguration(
                f'serial_start {self.serial_start} must not come after serial_end {self.serial_end}'
            )

    @property
    def row_letters(self) -> list[str]:
        return [chr(code) for code in range(ord(self.serial_start), ord(self.serial_end) + 1)]

    @property
    def has_first_row_override(self) -> bool:
        return self.first_row_layout is not None or self.first_row_seats is not None

    @property
    def has_last_row_override(self) -> bool:
        return self.last_row_layout is not None or self.last_row_seats is not None


@attrs.frozen
class BusConfiguration:
    vehicle_category: VehicleCategory = attrs.field(converter=VehicleCategory)
    lower_deck: FloorConfiguration
    number_of_floors: int = 1
    ac_type: AcType = attrs.field(default=AcType.AC, converter=AcType)
    brand: BusBrand = attrs.field(default=BusBrand.OTHER, converter=BusBrand)
    brand_other: Optional[str] = None
    model_name: Optional[str] = None
    upper_deck: Optional[FloorConfiguration] = None

    def __attrs_post_init__(self) -> None:
        if self.number_of_floors not in (1, 2):
            raise InvalidConfiguration(
                f'number_of_floors must be 1 or 2, got {self.number_of_floors}'
            )
        if self.number_of_floors == 2 and self.upper_deck is None:
            raise InvalidConfiguration('upper_deck is required for a double-decker')
        if self.number_of_floors == 1 and self.upper_deck is not None:
            raise InvalidConfiguration('upper_deck is only allowed when number_of_floors is 2')

    @property
    def is_double_decker(self) -> bool:
        return self.number_of_floors == 2

    @property
    def brand_name(self) -> str:
        if self.brand is BusBrand.OTHER and self.brand_other:
            return self.brand_other
        return self.brand.value
