from datetime import datetime

import attrs

from src.service.tour_booking.domain.enum.payment_method import PaymentMethod


@attrs.frozen
class PaymentRecord:
    method: PaymentMethod
    transaction_id: str
    amount: int
    paid_at: datetime
    collected_by: str
