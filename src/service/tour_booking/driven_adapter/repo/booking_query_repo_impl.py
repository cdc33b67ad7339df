from typing import List, Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def get_by_id(self, *, booking_id: str) -> Optional[Booking]:
        with self.store.lock:
            booking = self.store.bookings.get(booking_id)
            return attrs.evolve(booking) if booking else None

    @Logger.io
    async def list_by_status(self, *, status: BookingStatus) -> List[Booking]:
        with self.store.lock:
            return [
                attrs.evolve(booking)
                for booking in self.store.bookings.values()
                if booking.status is status
            ]
