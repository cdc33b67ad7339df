from fractions import Fraction

import pytest

from src.service.tour_booking.domain.entity.guest_entity import Guest
from src.service.tour_booking.domain.enum.guest import GuestType
from src.service.tour_booking.domain.pricing_calculator import (
    calculate_guest_price,
    calculate_package_subtotal,
    named_guests,
    round_half_up,
)
from test.service.tour_booking.builders import make_package


pytestmark = pytest.mark.unit


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        'value,expected',
        [
            (Fraction(7035, 10), 704),
            (Fraction(7034, 10), 703),
            (Fraction(5, 2), 3),
            (Fraction(3, 2), 2),
            (10, 10),
        ],
    )
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected


class TestGuestPrice:
    def test_adult_pays_price_per_person(self):
        assert calculate_guest_price(GuestType.ADULT, make_package(price_per_person=5000)) == 5000

    def test_couple_defaults_to_twice_the_price(self):
        assert calculate_guest_price(GuestType.COUPLE, make_package(price_per_person=5000)) == 10000

    def test_couple_uses_package_couple_price(self):
        package = make_package(price_per_person=5000, couple_price=9000)

        assert calculate_guest_price(GuestType.COUPLE, package) == 9000

    def test_child_defaults_to_seventy_percent_rounded(self):
        # 1005 * 0.7 = 703.5 -> 704
        assert calculate_guest_price(GuestType.CHILD, make_package(price_per_person=1005)) == 704

    def test_child_uses_package_child_price(self):
        package = make_package(price_per_person=5000, child_price=2500)

        assert calculate_guest_price(GuestType.CHILD, package) == 2500


class TestPackageSubtotal:
    def test_blank_named_guests_are_ignored(self):
        # Given: one adult, one child, one couple and a blank placeholder row
        guests = [
            Guest(name='Karim'),
            Guest(name='Nila', type=GuestType.CHILD),
            Guest(name='Mr & Mrs Hasan', type=GuestType.COUPLE),
            Guest(name='   '),
        ]

        # When
        subtotal = calculate_package_subtotal(guests, make_package(price_per_person=5000))

        # Then: 5000 + 3500 + 10000
        assert subtotal == 18500
        assert [guest.name for guest in named_guests(guests)] == [
            'Karim',
            'Nila',
            'Mr & Mrs Hasan',
        ]

    def test_no_named_guests_is_zero(self):
        assert calculate_package_subtotal([Guest()], make_package()) == 0


class TestGuestAge:
    def test_age_under_twelve_switches_to_child(self):
        assert Guest(name='Nila').with_age(8).type is GuestType.CHILD

    def test_age_twelve_or_more_switches_child_back_to_adult(self):
        guest = Guest(name='Nila', type=GuestType.CHILD)

        assert guest.with_age(12).type is GuestType.ADULT

    def test_couple_tier_kept_for_adult_age(self):
        guest = Guest(name='Hasans', type=GuestType.COUPLE)

        assert guest.with_age(40).type is GuestType.COUPLE
