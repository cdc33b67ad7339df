from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.service.tour_booking.domain.enum.deck import Deck
from src.service.tour_booking.domain.enum.guest import Gender
from src.service.tour_booking.domain.enum.seat_arrangement import SeatArrangement
from src.service.tour_booking.domain.enum.seat_status import SeatStatus
from src.service.tour_booking.domain.enum.vehicle import AcType, BusBrand, VehicleCategory


class FloorConfigurationRequest(BaseModel):
    arrangement: SeatArrangement
    serial_start: str = 'A'
    serial_end: str = 'K'
    seats_per_serial: Optional[int] = None  # defaults to the arrangement's seats per row
    first_row_layout: Optional[SeatArrangement] = None
    first_row_seats: Optional[int] = None
    last_row_layout: Optional[SeatArrangement] = None
    last_row_seats: Optional[int] = None


class BusConfigurationRequest(BaseModel):
    vehicle_category: VehicleCategory = VehicleCategory.BUS
    number_of_floors: int = 1
    ac_type: AcType = AcType.AC
    brand: BusBrand = BusBrand.OTHER
    brand_other: Optional[str] = None
    model_name: Optional[str] = None
    lower_deck: FloorConfigurationRequest
    upper_deck: Optional[FloorConfigurationRequest] = None

    class Config:
        json_schema_extra = {
            'example': {
                'vehicle_category': 'bus',
                'number_of_floors': 1,
                'ac_type': 'ac',
                'brand': 'hino',
                'lower_deck': {
                    'arrangement': '2x2',
                    'serial_start': 'A',
                    'serial_end': 'K',
                    'seats_per_serial': 4,
                    'last_row_seats': 5,
                },
            }
        }


class BookedByResponse(BaseModel):
    booking_id: str
    passenger_name: str
    gender: Gender


class SeatResponse(BaseModel):
    id: str
    deck: Deck
    row: str
    column: int
    label: str
    status: SeatStatus
    booked_by: Optional[BookedByResponse] = None
    blocked_reason: Optional[str] = None
    held_for: Optional[str] = None


class RowShapeResponse(BaseModel):
    row: str
    arrangement: SeatArrangement
    seat_count: int
    left_columns: int
    right_columns: int
    aisle_after: int


class DeckResponse(BaseModel):
    deck: Deck
    row_shapes: List[RowShapeResponse]
    rows: Dict[str, List[SeatResponse]]


class AvailabilityResponse(BaseModel):
    total: int
    available: int
    booked: int
    blocked: int


class SeatLayoutResponse(BaseModel):
    package_id: str
    vehicle_category: VehicleCategory
    number_of_floors: int
    brand: str
    total_seats: int
    last_updated: Optional[datetime] = None
    summary: AvailabilityResponse
    decks: List[DeckResponse]

    class Config:
        json_schema_extra = {
            'example': {
                'package_id': 'pkg-coxs-bazar',
                'vehicle_category': 'bus',
                'number_of_floors': 1,
                'brand': 'hino',
                'total_seats': 45,
                'last_updated': '2025-01-10T10:30:00Z',
                'summary': {'total': 45, 'available': 43, 'booked': 1, 'blocked': 1},
                'decks': [],
            }
        }


class BlockSeatsRequest(BaseModel):
    seat_ids: List[str] = Field(min_length=1)
    reason: str = 'Blocked by agency'

    class Config:
        json_schema_extra = {'example': {'seat_ids': ['L-A1', 'L-A2'], 'reason': 'Tour guide'}}


class UnblockSeatsRequest(BaseModel):
    seat_ids: List[str] = Field(min_length=1)

    class Config:
        json_schema_extra = {'example': {'seat_ids': ['L-A1']}}


class BulkSeatResponse(BaseModel):
    success: bool
    succeeded_seat_ids: List[str]
    failed_seats: Dict[str, str]  # seat_id -> reason


class ArrangementOptionResponse(BaseModel):
    arrangement: SeatArrangement
    seats_per_row: int
    aisle_after: int


class LayoutOptionsResponse(BaseModel):
    serial_options: List[str]
    arrangements: List[ArrangementOptionResponse]
    default_configuration: FloorConfigurationRequest
