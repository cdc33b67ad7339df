"""
Unit tests for the layout generator

Test Coverage:
1. Seat ids, labels and ordering of a generated deck
2. First/last row overrides and their precedence
3. Double-decker generation
4. Total seat count is always derived from the generated seats, and generation is deterministic
5. Configuration validation
"""

import pytest

from src.platform.exception.exceptions import InvalidConfiguration
from src.service.tour_booking.domain.entity.bus_configuration_entity import (
    BusConfiguration,
    FloorConfiguration,
)
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.enum.vehicle import VehicleCategory
from src.service.tour_booking.domain.layout_generator import (
    SERIAL_OPTIONS,
    create_seat_layout,
    default_bus_configuration,
    generate,
    generate_deck,
    row_shapes,
    seat_id_for,
    serial_options,
    total_seats,
)


pytestmark = pytest.mark.unit


class TestGenerateDeck:
    def test_base_arrangement_without_overrides(self):
        # Given: 2x2 rows A..C
        floor = FloorConfiguration(arrangement='2x2', serial_start='A', serial_end='C')

        # When
        seats = generate_deck(Deck.LOWER, floor)

        # Then: 3 rows of 4, generated row by row
        assert [seat.id for seat in seats] == [
            'L-A1', 'L-A2', 'L-A3', 'L-A4',
            'L-B1', 'L-B2', 'L-B3', 'L-B4',
            'L-C1', 'L-C2', 'L-C3', 'L-C4',
        ]  # fmt: skip
        assert seats[5].label == 'B2'
        assert seats[5].position.row == 'B'
        assert seats[5].position.column == 2
        assert all(seat.status is SeatStatus.AVAILABLE for seat in seats)

    def test_seats_per_serial_defaults_to_arrangement(self):
        floor = FloorConfiguration(arrangement=SeatArrangement.TWO_BY_THREE)

        assert floor.seats_per_serial == 5

    def test_seats_per_serial_overrides_arrangement(self):
        floor = FloorConfiguration(arrangement='2x2', serial_start='A', serial_end='A', seats_per_serial=3)

        assert [seat.id for seat in generate_deck(Deck.LOWER, floor)] == ['L-A1', 'L-A2', 'L-A3']

    def test_upper_deck_prefix(self):
        assert seat_id_for(Deck.UPPER, 'D', 2) == 'U-D2'

    def test_serial_options_are_a_to_k(self):
        options = serial_options()

        assert options == list('ABCDEFGHIJK')
        options.append('L')
        assert SERIAL_OPTIONS[-1] == 'K'


class TestRowOverrides:
    def test_first_row_override_uses_override_arrangement(self):
        # Given: 2x2 body with a 1x1 driver-side first row
        floor = FloorConfiguration(
            arrangement='2x2', serial_start='A', serial_end='C', first_row_layout='1x1'
        )

        # When
        shapes = row_shapes(floor)

        # Then
        assert [shape.seat_count for shape in shapes] == [2, 4, 4]
        assert shapes[0].arrangement is SeatArrangement.ONE_BY_ONE
        assert shapes[0].left_columns == 1
        assert shapes[0].right_columns == 1

    def test_last_row_bench_keeps_base_arrangement(self):
        # Given: rear bench of 5 on a 2x2 body, no last-row arrangement given
        floor = FloorConfiguration(
            arrangement='2x2', serial_start='A', serial_end='B', last_row_seats=5
        )

        # When
        shapes = row_shapes(floor)

        # Then: the aisle stays after column 2, the bench fills the right side
        last = shapes[-1]
        assert last.arrangement is SeatArrangement.TWO_BY_TWO
        assert last.seat_count == 5
        assert last.left_columns == 2
        assert last.right_columns == 3
        assert last.aisle_after == 2

    def test_last_row_override_wins_on_single_row_deck(self):
        # Given: a one-row deck with both overrides
        floor = FloorConfiguration(
            arrangement='2x2',
            serial_start='A',
            serial_end='A',
            first_row_layout='1x1',
            last_row_layout='2x3',
        )

        # When
        shapes = row_shapes(floor)

        # Then
        assert len(shapes) == 1
        assert shapes[0].arrangement is SeatArrangement.TWO_BY_THREE
        assert shapes[0].seat_count == 5

    def test_rear_bench_on_a_three_row_deck(self):
        # Given: 2x2 rows A..C, last row 2x3 with 5 seats
        floor = FloorConfiguration(
            arrangement='2x2',
            serial_start='A',
            serial_end='C',
            last_row_layout='2x3',
            last_row_seats=5,
        )

        # When
        shapes = row_shapes(floor)
        seats = generate_deck(Deck.LOWER, floor)

        # Then: rows A and B keep the base shape, row C splits 2 left / 3 right
        assert [shape.seat_count for shape in shapes] == [4, 4, 5]
        assert [shape.arrangement for shape in shapes] == [
            SeatArrangement.TWO_BY_TWO,
            SeatArrangement.TWO_BY_TWO,
            SeatArrangement.TWO_BY_THREE,
        ]
        assert (shapes[2].left_columns, shapes[2].right_columns) == (2, 3)
        assert len(seats) == 13
        assert [seat.id for seat in seats[-5:]] == ['L-C1', 'L-C2', 'L-C3', 'L-C4', 'L-C5']

    def test_short_row_has_no_right_block(self):
        floor = FloorConfiguration(
            arrangement='3x2', serial_start='A', serial_end='A', first_row_seats=2
        )

        shape = row_shapes(floor)[0]

        assert shape.left_columns == 2
        assert shape.right_columns == 0


class TestGenerate:
    def test_default_bus_has_45_seats(self):
        # Given: 2x2, rows A..K, 4 per row, 5-seat rear bench
        config = default_bus_configuration()

        # When
        layout = create_seat_layout(package_id='pkg-1', config=config)

        # Then
        assert layout.total_seats == 45
        assert total_seats(config) == 45
        assert layout.get_seat('L-K5') is not None
        assert layout.get_seat('L-K6') is None

    def test_double_decker_generates_both_decks(self):
        # Given
        config = BusConfiguration(
            vehicle_category=VehicleCategory.BUS,
            number_of_floors=2,
            lower_deck=FloorConfiguration(arrangement='2x1', serial_start='A', serial_end='B'),
            upper_deck=FloorConfiguration(arrangement='1x1', serial_start='A', serial_end='C'),
        )

        # When
        seats = generate(config)

        # Then: lower deck first, then upper deck
        assert len(seats) == 6 + 6
        assert seats[0].id == 'L-A1'
        assert seats[6].id == 'U-A1'
        assert {seat.deck for seat in seats} == {Deck.LOWER, Deck.UPPER}

    def test_generation_is_deterministic(self):
        # Given
        config = BusConfiguration(
            vehicle_category=VehicleCategory.BUS,
            number_of_floors=2,
            lower_deck=FloorConfiguration(
                arrangement='2x2', serial_start='A', serial_end='F', first_row_layout='1x1'
            ),
            upper_deck=FloorConfiguration(
                arrangement='2x1', serial_start='A', serial_end='D', last_row_seats=4
            ),
        )

        # When
        first = generate(config)
        second = generate(config)

        # Then: same seats, same order, every time
        assert first == second
        assert [seat.id for seat in first] == [seat.id for seat in second]

    def test_total_seats_matches_generated_length(self):
        config = BusConfiguration(
            vehicle_category='microbus',
            lower_deck=FloorConfiguration(
                arrangement='2x1',
                serial_start='A',
                serial_end='E',
                first_row_layout='1x1',
                last_row_seats=4,
            ),
        )

        assert total_seats(config) == len(generate(config)) == 2 + 3 * 3 + 4


class TestConfigurationValidation:
    def test_unknown_arrangement_is_rejected(self):
        with pytest.raises(InvalidConfiguration, match='Unknown seat arrangement'):
            FloorConfiguration(arrangement='4x4')

    def test_serial_start_after_end_is_rejected(self):
        with pytest.raises(InvalidConfiguration, match='must not come after'):
            FloorConfiguration(arrangement='2x2', serial_start='D', serial_end='B')

    def test_row_letter_must_be_single_uppercase_letter(self):
        with pytest.raises(InvalidConfiguration, match='single row letter'):
            FloorConfiguration(arrangement='2x2', serial_start='a')

    def test_seat_count_must_be_positive(self):
        with pytest.raises(InvalidConfiguration, match='positive seat count'):
            FloorConfiguration(arrangement='2x2', last_row_seats=0)

    def test_double_decker_requires_upper_deck(self):
        with pytest.raises(InvalidConfiguration, match='upper_deck is required'):
            BusConfiguration(
                vehicle_category='bus',
                number_of_floors=2,
                lower_deck=FloorConfiguration(arrangement='2x2'),
            )

    def test_single_decker_rejects_upper_deck(self):
        with pytest.raises(InvalidConfiguration, match='only allowed'):
            BusConfiguration(
                vehicle_category='bus',
                lower_deck=FloorConfiguration(arrangement='2x2'),
                upper_deck=FloorConfiguration(arrangement='2x2'),
            )

    def test_floor_count_limited_to_two(self):
        with pytest.raises(InvalidConfiguration, match='must be 1 or 2'):
            BusConfiguration(
                vehicle_category='bus',
                number_of_floors=3,
                lower_deck=FloorConfiguration(arrangement='2x2'),
            )

    def test_brand_name_prefers_free_text_for_other(self):
        config = BusConfiguration(
            vehicle_category='bus',
            brand='other',
            brand_other='Tata',
            lower_deck=FloorConfiguration(arrangement='2x2'),
        )

        assert config.brand_name == 'Tata'
