from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    BookingStateConflict,
    InvalidSeatTransition,
    NotFoundError,
    SeatUnavailable,
    UnknownSeat,
)
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.hold_dto import ReleaseExpiredHoldsResult
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.domain.enum.booking_status import BookingStatus
from src.service.tour_booking.domain.enum.seat_status import SeatStatus


class ReleaseExpiredHoldsUseCase:
    """
    Release the seats of every hold whose expiry has passed.

    Called by an external scheduler; this use case never runs a timer itself.
    The booking is marked expired first, compared against its stored hold
    status; a hold confirmed or cancelled in the meantime is left alone. A
    seat that is no longer held by the expired booking is skipped and logged.
    """

    def __init__(
        self,
        *,
        seat_layout_command_repo: ISeatLayoutCommandRepo,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
    ) -> None:
        self.seat_layout_command_repo = seat_layout_command_repo
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_layout_command_repo: ISeatLayoutCommandRepo = Depends(
            Provide[Container.seat_layout_command_repo]
        ),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(
            seat_layout_command_repo=seat_layout_command_repo,
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
        )

    @Logger.io
    async def execute(self, *, now: Optional[datetime] = None) -> ReleaseExpiredHoldsResult:
        now = now or datetime.now(timezone.utc)
        result = ReleaseExpiredHoldsResult()
        with self.tracer.start_as_current_span('use_case.release_expired_holds'):
            holds = await self.booking_query_repo.list_by_status(status=BookingStatus.HOLD)
            for booking in (hold for hold in holds if hold.is_hold_expired(now)):
                try:
                    await self.booking_command_repo.update_booking(
                        booking=booking.expire(now=now), expected_status=BookingStatus.HOLD
                    )
                except (BookingStateConflict, NotFoundError) as e:
                    Logger.base.warning(
                        f'⚠️ [HOLD] Hold {booking.booking_ref} changed before expiry, '
                        f'leaving its seats: {e.message}'
                    )
                    continue

                released = []
                for seat_id in booking.selected_seat_ids:
                    try:
                        await self.seat_layout_command_repo.compare_and_swap_seat_status(
                            package_id=booking.package_id,
                            seat_id=seat_id,
                            expected_status=SeatStatus.BLOCKED,
                            new_status=SeatStatus.AVAILABLE,
                            expected_holder=booking.id,
                        )
                    except (
                        NotFoundError,
                        SeatUnavailable,
                        UnknownSeat,
                        InvalidSeatTransition,
                    ) as e:
                        result.skipped_seats[seat_id] = e.message
                        Logger.base.warning(
                            f'⚠️ [HOLD] Seat {seat_id} of expired hold {booking.booking_ref} '
                            f'skipped: {e.message}'
                        )
                    else:
                        released.append(seat_id)

                result.expired_booking_ids.append(booking.id)
                result.released_seat_ids[booking.id] = released
                Logger.base.info(
                    f'⏰ [HOLD] Hold {booking.booking_ref} expired, released {len(released)} seat(s)'
                )

        Logger.base.info(
            f'⏰ [HOLD] Expired {result.total_expired} hold(s), '
            f'released {result.total_released} seat(s)'
        )
        return result
