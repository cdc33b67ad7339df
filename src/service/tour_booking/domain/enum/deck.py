from enum import StrEnum


class Deck(StrEnum):
    LOWER = 'lower'
    UPPER = 'upper'

    @property
    def prefix(self) -> str:
        """Seat id prefix, e.g. ``L`` in ``L-C3``"""
        return 'L' if self is Deck.LOWER else 'U'
