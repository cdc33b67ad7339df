"""Tour Booking App Interfaces (driven ports)"""

from src.service.tour_booking.app.interface.i_agency_settings_query_repo import (
    IAgencySettingsQueryRepo,
)
from src.service.tour_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.tour_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.tour_booking.app.interface.i_seat_layout_command_repo import (
    ISeatLayoutCommandRepo,
)
from src.service.tour_booking.app.interface.i_seat_layout_query_repo import ISeatLayoutQueryRepo
from src.service.tour_booking.app.interface.i_tour_package_repo import ITourPackageRepo

__all__ = [
    'IAgencySettingsQueryRepo',
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ISeatLayoutCommandRepo',
    'ISeatLayoutQueryRepo',
    'ITourPackageRepo',
]
