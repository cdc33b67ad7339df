from typing import Optional

import attrs

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import (
    BookingStateConflict,
    ConflictError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def next_booking_ref(self, *, agency_id: str) -> str:
        with self.store.lock:
            self.store.booking_ref_counters[agency_id] += 1
            counter = self.store.booking_ref_counters[agency_id]
        return str(counter).zfill(settings.BOOKING_REF_DIGITS)

    @Logger.io
    async def create_booking(self, *, booking: Booking) -> Booking:
        with self.store.lock:
            if booking.id in self.store.bookings:
                raise ConflictError(f'Booking {booking.id} already exists')
            self.store.bookings[booking.id] = attrs.evolve(booking)
        return booking

    @Logger.io
    async def update_booking(
        self, *, booking: Booking, expected_status: Optional[BookingStatus] = None
    ) -> Booking:
        with self.store.lock:
            stored = self.store.bookings.get(booking.id)
            if stored is None:
                raise NotFoundError(f'Booking {booking.id} not found')
            if expected_status is not None and stored.status is not expected_status:
                raise BookingStateConflict(
                    booking_id=booking.id, expected=expected_status, actual=stored.status
                )
            self.store.bookings[booking.id] = attrs.evolve(booking)
        return booking

    @Logger.io
    async def delete_booking(self, *, booking_id: str) -> bool:
        with self.store.lock:
            return self.store.bookings.pop(booking_id, None) is not None
