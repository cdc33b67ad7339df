"""Tour Booking Domain Value Objects"""

from src.service.tour_booking.domain.value_object.booked_by import BookedBy
from src.service.tour_booking.domain.value_object.bulk_seat_result import BulkSeatResult
from src.service.tour_booking.domain.value_object.payment_record import PaymentRecord
from src.service.tour_booking.domain.value_object.row_shape import RowShape
from src.service.tour_booking.domain.value_object.seat_position import SeatPosition

__all__ = ['BookedBy', 'BulkSeatResult', 'PaymentRecord', 'RowShape', 'SeatPosition']
