from typing import Any, Awaitable, Callable, Iterable

from src.platform.exception.exceptions import InvalidSeatTransition, SeatUnavailable, UnknownSeat
from src.service.tour_booking.domain.value_object.bulk_seat_result import BulkSeatResult


SEAT_REFUSALS = (SeatUnavailable, UnknownSeat, InvalidSeatTransition)


async def update_each_seat(
    seat_ids: Iterable[str], update: Callable[[str], Awaitable[Any]]
) -> BulkSeatResult:
    """
    Run ``update`` once per distinct seat id, in order.

    A refused seat is recorded as a failure and the remaining seats still run;
    nothing already applied is undone.
    """
    result = BulkSeatResult()
    for seat_id in dict.fromkeys(seat_ids):
        try:
            await update(seat_id)
        except SEAT_REFUSALS as e:
            result.record_failure(seat_id, e.message)
        else:
            result.record_success(seat_id)
    return result
