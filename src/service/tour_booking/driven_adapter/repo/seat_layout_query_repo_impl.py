from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class SeatLayoutQueryRepoImpl(ISeatLayoutQueryRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def load_seat_layout(self, *, package_id: str) -> Optional[SeatLayout]:
        with self.store.lock:
            layout = self.store.seat_layouts.get(package_id)
            return layout.snapshot() if layout else None
