from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class TourPackageRepoImpl(ITourPackageRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def get_package(self, *, package_id: str) -> Optional[TourPackage]:
        with self.store.lock:
            return self.store.packages.get(package_id)

    @Logger.io
    async def save_package(self, *, package: TourPackage) -> TourPackage:
        with self.store.lock:
            self.store.packages[package.id] = package
        return package
