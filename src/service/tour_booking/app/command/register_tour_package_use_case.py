from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo
from src.service.tour_booking.domain.entity.tour_package_entity import TourPackage


class RegisterTourPackageUseCase:
    """Store the package snapshot the booking flow prices and labels against"""

    def __init__(self, *, tour_package_repo: ITourPackageRepo) -> None:
        self.tour_package_repo = tour_package_repo

    @classmethod
    @inject
    def depends(
        cls,
        tour_package_repo: ITourPackageRepo = Depends(Provide[Container.tour_package_repo]),
    ) -> Self:
        return cls(tour_package_repo=tour_package_repo)

    @Logger.io
    async def register(self, *, package: TourPackage) -> TourPackage:
        prices = [package.price_per_person, package.couple_price, package.child_price]
        if any(price is not None and price < 0 for price in prices):
            raise DomainError(f'Package {package.id} prices must not be negative')

        saved = await self.tour_package_repo.save_package(package=package)
        Logger.base.info(f'📦 [PACKAGE] Registered package {package.id} "{package.title}"')
        return saved
