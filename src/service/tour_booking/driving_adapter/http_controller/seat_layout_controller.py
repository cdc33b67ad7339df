from typing import Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.command.block_seats_use_case import BlockSeatsUseCase
from src.service.tour_booking.app.command.configure_seat_layout_use_case import (
    ConfigureSeatLayoutUseCase,
)
from src.service.tour_booking.app.command.unblock_seats_use_case import UnblockSeatsUseCase
from src.service.tour_booking.app.dto.seat_layout_dto import SeatLayoutView
from src.service.tour_booking.app.query.get_seat_layout_use_case import GetSeatLayoutUseCase
from src.service.tour_booking.domain.entity.bus_configuration_entity import (
    BusConfiguration,
    FloorConfiguration,
)
from src.service.tour_booking.domain.entity.seat_entity import Seat
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.layout_generator import (
    default_floor_configuration,
    serial_options,
)
from src.service.tour_booking.domain.value_object.bulk_seat_result import BulkSeatResult
from src.service.tour_booking.driving_adapter.http_controller.schema.seat_layout_schema import (
    ArrangementOptionResponse,
    AvailabilityResponse,
    BlockSeatsRequest,
    BookedByResponse,
    BulkSeatResponse,
    BusConfigurationRequest,
    DeckResponse,
    FloorConfigurationRequest,
    LayoutOptionsResponse,
    RowShapeResponse,
    SeatLayoutResponse,
    SeatResponse,
    UnblockSeatsRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


def _to_floor(request: Optional[FloorConfigurationRequest]) -> Optional[FloorConfiguration]:
    if request is None:
        return None
    kwargs = request.model_dump(exclude_none=True)
    return FloorConfiguration(**kwargs)


def _to_seat_response(seat: Seat) -> SeatResponse:
    return SeatResponse(
        id=seat.id,
        deck=seat.deck,
        row=seat.position.row,
        column=seat.position.column,
        label=seat.label,
        status=seat.status,
        booked_by=(
            BookedByResponse(
                booking_id=seat.booked_by.booking_id,
                passenger_name=seat.booked_by.passenger_name,
                gender=seat.booked_by.gender,
            )
            if seat.booked_by
            else None
        ),
        blocked_reason=seat.blocked_reason,
        held_for=seat.held_for,
    )


def _to_layout_response(view: SeatLayoutView) -> SeatLayoutResponse:
    layout = view.layout
    config = layout.bus_configuration
    return SeatLayoutResponse(
        package_id=layout.package_id,
        vehicle_category=config.vehicle_category,
        number_of_floors=config.number_of_floors,
        brand=config.brand_name,
        total_seats=layout.total_seats,
        last_updated=layout.last_updated,
        summary=AvailabilityResponse(
            total=view.summary.total,
            available=view.summary.available,
            booked=view.summary.booked,
            blocked=view.summary.blocked,
        ),
        decks=[
            DeckResponse(
                deck=deck.deck,
                row_shapes=[
                    RowShapeResponse(
                        row=shape.row,
                        arrangement=shape.arrangement,
                        seat_count=shape.seat_count,
                        left_columns=shape.left_columns,
                        right_columns=shape.right_columns,
                        aisle_after=shape.aisle_after,
                    )
                    for shape in deck.row_shapes
                ],
                rows={
                    row: [_to_seat_response(seat) for seat in seats]
                    for row, seats in deck.rows.items()
                },
            )
            for deck in view.decks
        ],
    )


def _to_bulk_response(result: BulkSeatResult) -> BulkSeatResponse:
    return BulkSeatResponse(
        success=result.success,
        succeeded_seat_ids=result.succeeded_seat_ids,
        failed_seats=result.failed_seats,
    )


@router.get('/seat-layout/options', status_code=status.HTTP_200_OK)
async def get_layout_options() -> LayoutOptionsResponse:
    default = default_floor_configuration()
    return LayoutOptionsResponse(
        serial_options=serial_options(),
        arrangements=[
            ArrangementOptionResponse(
                arrangement=arrangement,
                seats_per_row=arrangement.seats_per_row,
                aisle_after=arrangement.aisle_after,
            )
            for arrangement in SeatArrangement
        ],
        default_configuration=FloorConfigurationRequest(
            arrangement=default.arrangement,
            serial_start=default.serial_start,
            serial_end=default.serial_end,
            seats_per_serial=default.seats_per_serial,
            last_row_seats=default.last_row_seats,
        ),
    )


@router.put('/{package_id}/seat-layout', status_code=status.HTTP_200_OK)
@Logger.io
async def configure_seat_layout(
    package_id: str,
    request: BusConfigurationRequest,
    use_case: ConfigureSeatLayoutUseCase = Depends(ConfigureSeatLayoutUseCase.depends),
    query_use_case: GetSeatLayoutUseCase = Depends(GetSeatLayoutUseCase.depends),
) -> SeatLayoutResponse:
    with tracer.start_as_current_span('controller.configure_seat_layout') as span:
        span.set_attribute('package_id', package_id)
        config = BusConfiguration(
            vehicle_category=request.vehicle_category,
            number_of_floors=request.number_of_floors,
            ac_type=request.ac_type,
            brand=request.brand,
            brand_other=request.brand_other,
            model_name=request.model_name,
            lower_deck=_to_floor(request.lower_deck),
            upper_deck=_to_floor(request.upper_deck),
        )
        layout = await use_case.configure(package_id=package_id, config=config)
        span.set_attribute('total_seats', layout.total_seats)

        return _to_layout_response(await query_use_case.get_seat_layout(package_id=package_id))


@router.get('/{package_id}/seat-layout', status_code=status.HTTP_200_OK)
@Logger.io
async def get_seat_layout(
    package_id: str,
    use_case: GetSeatLayoutUseCase = Depends(GetSeatLayoutUseCase.depends),
) -> SeatLayoutResponse:
    return _to_layout_response(await use_case.get_seat_layout(package_id=package_id))


@router.delete('/{package_id}/seat-layout', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def remove_seat_layout(
    package_id: str,
    use_case: ConfigureSeatLayoutUseCase = Depends(ConfigureSeatLayoutUseCase.depends),
) -> None:
    await use_case.remove(package_id=package_id)


@router.post('/{package_id}/seat-layout/block', status_code=status.HTTP_200_OK)
@Logger.io
async def block_seats(
    package_id: str,
    request: BlockSeatsRequest,
    use_case: BlockSeatsUseCase = Depends(BlockSeatsUseCase.depends),
) -> BulkSeatResponse:
    result = await use_case.block(
        package_id=package_id, seat_ids=request.seat_ids, reason=request.reason
    )
    return _to_bulk_response(result)


@router.post('/{package_id}/seat-layout/unblock', status_code=status.HTTP_200_OK)
@Logger.io
async def unblock_seats(
    package_id: str,
    request: UnblockSeatsRequest,
    use_case: UnblockSeatsUseCase = Depends(UnblockSeatsUseCase.depends),
) -> BulkSeatResponse:
    result = await use_case.unblock(package_id=package_id, seat_ids=request.seat_ids)
    return _to_bulk_response(result)
