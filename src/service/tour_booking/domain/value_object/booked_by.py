import attrs

from src.service.tour_booking.domain.enum.guest import Gender


@attrs.frozen
class BookedBy:
    """Who occupies a booked/sold seat"""

    booking_id: str
    passenger_name: str
    gender: Gender
