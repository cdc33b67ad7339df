"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.tour_booking.app.command import (
    block_seats_use_case,
    cancel_booking_use_case,
    checkout_use_case,
    configure_seat_layout_use_case,
    confirm_hold_use_case,
    register_tour_package_use_case,
    release_expired_holds_use_case,
    unblock_seats_use_case,
)
from src.service.tour_booking.app.query import get_booking_use_case, get_seat_layout_use_case
from src.service.tour_booking.driving_adapter.http_controller import (
    booking_controller,
    package_controller,
)


WIRE_MODULES: list[ModuleType] = [
    register_tour_package_use_case,
    configure_seat_layout_use_case,
    block_seats_use_case,
    unblock_seats_use_case,
    checkout_use_case,
    confirm_hold_use_case,
    cancel_booking_use_case,
    release_expired_holds_use_case,
    get_seat_layout_use_case,
    get_booking_use_case,
    package_controller,
    booking_controller,
]
