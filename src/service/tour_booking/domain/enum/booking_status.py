from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'
    HOLD = 'hold'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    EXPIRED = 'expired'

    @property
    def holds_seats(self) -> bool:
        return self in (BookingStatus.PENDING, BookingStatus.HOLD, BookingStatus.CONFIRMED)


class PaymentStatus(StrEnum):
    UNPAID = 'unpaid'
    ADVANCE_PAID = 'advance_paid'
    FULLY_PAID = 'fully_paid'

    @classmethod
    def from_amounts(cls, *, total_amount: int, advance_paid: int) -> 'PaymentStatus':
        if advance_paid >= total_amount:
            return cls.FULLY_PAID
        if advance_paid > 0:
            return cls.ADVANCE_PAID
        return cls.UNPAID


class BookingSource(StrEnum):
    WALK_IN = 'walk-in'
    PHONE = 'phone'
    WHATSAPP = 'whatsapp'
    MESSENGER = 'messenger'
    WEB = 'web'


class HoldCreatedBy(StrEnum):
    AGENT = 'agent'
    AGENCY_ADMIN = 'agency_admin'
