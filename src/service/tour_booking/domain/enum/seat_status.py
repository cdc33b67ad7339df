from enum import StrEnum


class SeatStatus(StrEnum):
    """Persisted seat status. Client-side selection is never stored here."""

    AVAILABLE = 'available'
    BLOCKED = 'blocked'
    BOOKED = 'booked'
    SOLD = 'sold'

    @property
    def is_occupied(self) -> bool:
        return self in (SeatStatus.BOOKED, SeatStatus.SOLD)
