from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.command.bulk_seat_update import update_each_seat
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.value_object.bulk_seat_result import BulkSeatResult


class UnblockSeatsUseCase:
    """Release administrative blocks. Seats held for a hold booking are refused."""

    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        seat_layout_query_repo: ISeatLayoutQueryRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.seat_layout_query_repo = seat_layout_query_repo

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
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            seat_layout_query_repo=seat_layout_query_repo,
        )

    @Logger.io
    async def unblock(self, *, package_id: str, seat_ids: List[str]) -> BulkSeatResult:
        if not await self.seat_layout_query_repo.load_seat_layout(package_id=package_id):
            raise NotFoundError(f'Package {package_id} has no seat layout')

        result = await update_each_seat(
            seat_ids,
            lambda seat_id: self.seat_layout_command_repo.compare_and_swap_seat_status(
                package_id=package_id,
                seat_id=seat_id,
                expected_status=SeatStatus.BLOCKED,
                new_status=SeatStatus.AVAILABLE,
            ),
        )

        Logger.base.info(
            f'✅ [SEAT] Unblocked {len(result.succeeded_seat_ids)} seat(s) on package {package_id}, '
            f'{len(result.failed_seats)} failed'
        )
        return result
