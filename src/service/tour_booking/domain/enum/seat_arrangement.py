from enum import StrEnum


class SeatArrangement(StrEnum):
    """Row shape written as ``<left>x<right>`` seats around the aisle"""

    ONE_BY_ONE = '1x1'
    TWO_BY_ONE = '2x1'
    TWO_BY_TWO = '2x2'
    TWO_BY_THREE = '2x3'
    THREE_BY_TWO = '3x2'

    @property
    def left_columns(self) -> int:
        return _COLUMNS[self][0]

    @property
    def right_columns(self) -> int:
        return _COLUMNS[self][1]

    @property
    def seats_per_row(self) -> int:
        return self.left_columns + self.right_columns

    @property
    def aisle_after(self) -> int:
        """Column number after which the aisle appears"""
        return self.left_columns


# Fixed canonical table: (left columns, right columns)
_COLUMNS: dict[SeatArrangement, tuple[int, int]] = {
    SeatArrangement.ONE_BY_ONE: (1, 1),
    SeatArrangement.TWO_BY_ONE: (2, 1),
    SeatArrangement.TWO_BY_TWO: (2, 2),
    SeatArrangement.TWO_BY_THREE: (2, 3),
    SeatArrangement.THREE_BY_TWO: (3, 2),
}
