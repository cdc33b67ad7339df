from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo
from src.service.tour_booking.domain.aggregate.seat_layout_aggregate import SeatLayout
from src.service.tour_booking.domain.entity.bus_configuration_entity import BusConfiguration
from src.service.tour_booking.domain.layout_generator import create_seat_layout
from src.service.tour_booking.domain.seat_registry import count_available


class ConfigureSeatLayoutUseCase:
    """
    (Re)generate a package's seat layout from its bus configuration.

    Regenerating replaces every seat, so seat ids issued for the previous
    layout become unknown to checkout. Occupied seats are reported in the log
    and not carried over.
    """

    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        seat_layout_query_repo: ISeatLayoutQueryRepo,
        tour_package_repo: ITourPackageRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.seat_layout_query_repo = seat_layout_query_repo
        self.tour_package_repo = tour_package_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_layout_command_repo: ISeatLayoutCommandRepo = Depends(
            Provide[Container.seat_layout_command_repo]
        ),
        seat_layout_query_repo: ISeatLayoutQueryRepo = Depends(
            Provide[Container.seat_layout_query_repo]
        ),
        tour_package_repo: ITourPackageRepo = Depends(Provide[Container.tour_package_repo]),
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            seat_layout_query_repo=seat_layout_query_repo,
            tour_package_repo=tour_package_repo,
        )

    @Logger.io
    async def configure(
        self, *, package_id: str, config: BusConfiguration, now: Optional[datetime] = None
    ) -> SeatLayout:
        if not await self.tour_package_repo.get_package(package_id=package_id):
            raise NotFoundError(f'Package {package_id} not found')

        previous = await self.seat_layout_query_repo.load_seat_layout(package_id=package_id)
        if previous is not None:
            occupied = previous.total_seats - count_available(previous.seat_list)
            if occupied:
                Logger.base.warning(
                    f'⚠️ [LAYOUT] Regenerating package {package_id} discards {occupied} '
                    f'occupied seat(s); their seat ids are no longer valid'
                )

        layout = create_seat_layout(
            package_id=package_id, config=config, now=now or datetime.now(timezone.utc)
        )
        return await self.seat_layout_command_repo.save_seat_layout(layout=layout)

    @Logger.io
    async def remove(self, *, package_id: str) -> None:
        """Turn seat selection off for the package"""
        if not await self.seat_layout_command_repo.delete_seat_layout(package_id=package_id):
            raise NotFoundError(f'Package {package_id} has no seat layout')
        Logger.base.info(f'🗑️ [LAYOUT] Removed seat layout of package {package_id}')
