from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    InvalidBookingState,
    InvalidSeatTransition,
    NotFoundError,
    SeatUnavailable,
    UnknownSeat,
)
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.domain.entity.booking_entity import Booking
from src.service.tour_booking.domain.enum.seat_status import SeatStatus


class CancelBookingUseCase:
    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        seat_layout_query_repo: ISeatLayoutQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.seat_layout_query_repo = seat_layout_query_repo
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo

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
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            seat_layout_query_repo=seat_layout_query_repo,
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
        )

    @Logger.io
    async def cancel(self, *, booking_id: str, now: Optional[datetime] = None) -> Booking:
        """
        Release every seat of a pending, confirmed or held booking.

        The cancellation is written against the status read here; a booking
        confirmed or expired concurrently raises BookingStateConflict and
        keeps its seats.
        """
        now = now or datetime.now(timezone.utc)
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError(f'Booking {booking_id} not found')
        if not booking.status.holds_seats:
            raise InvalidBookingState(f'Booking {booking.booking_ref} is already {booking.status}')

        cancelled = await self.booking_command_repo.update_booking(
            booking=booking.cancel(now=now), expected_status=booking.status
        )

        layout = await self.seat_layout_query_repo.load_seat_layout(package_id=booking.package_id)
        released = 0
        for seat_id in booking.selected_seat_ids:
            seat = layout.get_seat(seat_id) if layout is not None else None
            if seat is None or seat.status is SeatStatus.AVAILABLE:
                Logger.base.warning(
                    f'⚠️ [BOOKING] Seat {seat_id} of {booking.booking_ref} is no longer '
                    f'held by it, skipping'
                )
                continue
            try:
                await self.seat_layout_command_repo.compare_and_swap_seat_status(
                    package_id=booking.package_id,
                    seat_id=seat_id,
                    expected_status=seat.status,
                    new_status=SeatStatus.AVAILABLE,
                    expected_holder=booking.id,
                )
                released += 1
            except (SeatUnavailable, UnknownSeat, InvalidSeatTransition) as e:
                Logger.base.warning(
                    f'⚠️ [BOOKING] Seat {seat_id} of {booking.booking_ref} not released: {e.message}'
                )

        Logger.base.info(
            f'🗑️ [BOOKING] Cancelled {booking.booking_ref}, released {released} seat(s)'
        )
        return cancelled
