import attrs


@attrs.frozen
class SeatPosition:
    row: str
    column: int

    @property
    def label(self) -> str:
        return f'{self.row}{self.column}'
