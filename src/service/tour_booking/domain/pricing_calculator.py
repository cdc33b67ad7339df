from fractions import Fraction
import math
from typing import Iterable, List

from src.service.tour_booking.domain.entity.guest_entity import Guest
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage
from src.service.tour_booking.domain.enum.guest import GuestType


CHILD_PRICE_RATIO = Fraction(7, 10)
COUPLE_MULTIPLIER = 2


def round_half_up(value: Fraction | int) -> int:
    """Nearest integer, halves rounded toward +infinity (same as JavaScript Math.round)"""
    return math.floor(Fraction(value) + Fraction(1, 2))


def calculate_guest_price(guest_type: GuestType, package: TourPackage) -> int:
    if guest_type is GuestType.COUPLE:
        if package.couple_price is not None:
            return package.couple_price
        return package.price_per_person * COUPLE_MULTIPLIER
    if guest_type is GuestType.CHILD:
        if package.child_price is not None:
            return package.child_price
        return round_half_up(package.price_per_person * CHILD_PRICE_RATIO)
    return package.price_per_person


def named_guests(guests: Iterable[Guest]) -> List[Guest]:
    return [guest for guest in guests if guest.is_named]


def calculate_package_subtotal(guests: Iterable[Guest], package: TourPackage) -> int:
    return sum(calculate_guest_price(guest.type, package) for guest in named_guests(guests))
