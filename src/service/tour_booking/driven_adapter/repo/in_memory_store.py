"""
In-memory Store

Process-local storage shared by the in-memory repositories. One re-entrant
lock guards every mutation; it is never held across an ``await`` so it is safe
to use from the event loop and from worker threads alike.
"""

from collections import defaultdict
import threading
from typing import DefaultDict, Dict

from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.agency_booking_settings_entity import (
    AgencyBookingSettings,
)
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage


class InMemoryStore:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.seat_layouts: Dict[str, SeatLayout] = {}
        self.bookings: Dict[str, Booking] = {}
        self.packages: Dict[str, TourPackage] = {}
        self.agency_settings: Dict[str, AgencyBookingSettings] = {}
        self.booking_ref_counters: DefaultDict[str, int] = defaultdict(int)

    def clear(self) -> None:
        with self.lock:
            self.seat_layouts.clear()
            self.bookings.clear()
            self.packages.clear()
            self.agency_settings.clear()
            self.booking_ref_counters.clear()
