from datetime import datetime, timezone
from typing import Optional

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.domain import seat_state_machine
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class SeatLayoutCommandRepoImpl(ISeatLayoutCommandRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def save_seat_layout(self, *, layout: SeatLayout) -> SeatLayout:
        with self.store.lock:
            self.store.seat_layouts[layout.package_id] = layout.snapshot()
        return layout.snapshot()

    @Logger.io
    async def delete_seat_layout(self, *, package_id: str) -> bool:
        with self.store.lock:
            return self.store.seat_layouts.pop(package_id, None) is not None

    @Logger.io
    async def compare_and_swap_seat_status(
        self,
        *,
        package_id: str,
        seat_id: str,
        expected_status: SeatStatus,
        new_status: SeatStatus,
        booked_by: Optional[BookedBy] = None,
        blocked_reason: Optional[str] = None,
        held_for: Optional[str] = None,
        expected_holder: Optional[str] = None,
    ) -> Seat:
        with self.store.lock:
            layout = self.store.seat_layouts.get(package_id)
            if layout is None:
                raise NotFoundError(f'Package {package_id} has no seat layout')
            return seat_state_machine.apply(
                layout,
                seat_id=seat_id,
                expected_status=expected_status,
                new_status=new_status,
                booked_by=booked_by,
                blocked_reason=blocked_reason,
                held_for=held_for,
                expected_holder=expected_holder,
                now=datetime.now(timezone.utc),
            )
