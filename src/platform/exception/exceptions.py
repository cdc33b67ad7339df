class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


# =============================================================================
# Seat layout
# =============================================================================


class InvalidConfiguration(DomainError):
    """Bus/floor configuration cannot produce a seat layout"""


class InvalidSeatTransition(DomainError):
    def __init__(self, *, seat_id: str, current: str, target: str) -> None:
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} cannot move from {current} to {target}')


class SeatUnavailable(ConflictError):
    def __init__(self, seat_id: str, message: str | None = None) -> None:
        self.seat_id = seat_id
        super().__init__(message or f'Seat {seat_id} is no longer available')


class UnknownSeat(ConflictError):
    """Selected seat id is not part of the package's current layout (stale selection)"""

    def __init__(self, *, package_id: str, seat_id: str) -> None:
        self.package_id = package_id
        self.seat_id = seat_id
        super().__init__(f'Seat {seat_id} does not exist in the layout of package {package_id}')


# =============================================================================
# Checkout
# =============================================================================


class EmptySelection(DomainError):
    pass


class SeatCountMismatch(DomainError):
    def __init__(self, *, package_id: str, message: str) -> None:
        self.package_id = package_id
        super().__init__(message)


class InvalidPaymentAmount(DomainError):
    pass


class InsufficientAdvance(DomainError):
    def __init__(self, *, minimum_advance: int, advance_paid: int) -> None:
        self.minimum_advance = minimum_advance
        self.advance_paid = advance_paid
        super().__init__(
            f'Minimum advance payment is {minimum_advance}, received {advance_paid}'
        )


class MissingTransactionReference(DomainError):
    pass


class HoldNotPermitted(ForbiddenError):
    pass


class HoldExpired(DomainError):
    pass


class InvalidBookingState(DomainError):
    pass


class BookingStateConflict(ConflictError):
    """Booking status changed between the caller's read and its write"""

    def __init__(self, *, booking_id: str, expected: str, actual: str) -> None:
        self.booking_id = booking_id
        super().__init__(f'Booking {booking_id} is {actual}, expected {expected}')
