import attrs

from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement


@attrs.frozen
class RowShape:
    """Effective shape of one generated row, used to place the aisle when rendering"""

    row: str
    arrangement: SeatArrangement
    seat_count: int
    left_columns: int
    right_columns: int

    @property
    def aisle_after(self) -> int:
        return self.left_columns
