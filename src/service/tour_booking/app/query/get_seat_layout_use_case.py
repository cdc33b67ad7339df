from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.dto.seat_layout_dto import DeckView, SeatLayoutView
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.layout_generator import row_shapes
from src.service.tour_booking.domain.seat_registry import (
    availability_summary,
    group_seats_by_row,
    seats_by_deck,
)


class GetSeatLayoutUseCase:
    def __init__(self, *, seat_layout_query_repo: ISeatLayoutQueryRepo) -> None:
        self.seat_layout_query_repo = seat_layout_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        seat_layout_query_repo: ISeatLayoutQueryRepo = Depends(
            Provide[Container.seat_layout_query_repo]
        ),
    ) -> Self:
        return cls(seat_layout_query_repo=seat_layout_query_repo)

    @Logger.io
    async def get_seat_layout(self, *, package_id: str) -> SeatLayoutView:
        layout = await self.seat_layout_query_repo.load_seat_layout(package_id=package_id)
        if not layout:
            raise NotFoundError(f'Package {package_id} has no seat layout')

        config = layout.bus_configuration
        decks = []
        for deck in layout.decks:
            floor = config.upper_deck if deck is Deck.UPPER else config.lower_deck
            if floor is None:
                continue
            decks.append(
                DeckView(
                    deck=deck,
                    row_shapes=row_shapes(floor),
                    rows=group_seats_by_row(seats_by_deck(layout.seat_list, deck)),
                )
            )
        return SeatLayoutView(layout=layout, summary=availability_summary(layout), decks=decks)
