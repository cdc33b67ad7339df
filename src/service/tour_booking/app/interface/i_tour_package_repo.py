from abc import ABC, abstractmethod
from typing import Optional

from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage


class ITourPackageRepo(ABC):
    @abstractmethod
    async def get_package(self, *, package_id: str) -> Optional[TourPackage]:
        pass

    @abstractmethod
    async def save_package(self, *, package: TourPackage) -> TourPackage:
        pass
