"""
Booking Allocation

Money rules of a multi-package checkout. One discount and one advance payment
are typed against the combined amount and split across packages in proportion
to each package's share. Each share is rounded on its own, so the shares may
miss the typed amount by at most one unit per package; no correction pass is
applied.
"""

from datetime import datetime
from fractions import Fraction
import math
from typing import List, Optional, Sequence

import attrs

from src.platform.exception.exceptions import (
    HoldNotPermitted,
    InsufficientAdvance,
    InvalidPaymentAmount,
    MissingTransactionReference,
)
from src.service.tour_booking.domain.entity.agency_booking_settings_entity import (
    AgencyBookingSettings,
)
from src.service.tour_booking.domain.enum.payment_method import PaymentMethod
from src.service.tour_booking.domain.enum.user_role import UserRole
from src.service.tour_booking.domain.pricing_calculator import round_half_up


@attrs.frozen
class PackageAllocation:
    subtotal: int
    discount_amount: int
    final_amount: int
    advance_paid: int

    @property
    def due_amount(self) -> int:
        return self.final_amount - self.advance_paid


@attrs.frozen
class CheckoutTotals:
    subtotal_before_discount: int
    discount_amount: int
    grand_total: int
    advance_paid: int
    allocations: List[PackageAllocation]


def proportional_share(amount: int, part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(Fraction(amount * part, whole))


def distribute_proportionally(amount: int, parts: Sequence[int]) -> List[int]:
    whole = sum(parts)
    return [proportional_share(amount, part, whole) for part in parts]


def rounding_drift(shares: Sequence[int], amount: int) -> int:
    """Signed gap between the rounded shares and the amount they were split from"""
    return sum(shares) - amount


def allocate(
    *, subtotals: Sequence[int], discount_amount: int, advance_paid: int, is_hold: bool
) -> CheckoutTotals:
    subtotal_before_discount = sum(subtotals)
    grand_total = subtotal_before_discount - discount_amount
    discounts = distribute_proportionally(discount_amount, subtotals)
    final_amounts = [subtotal - discount for subtotal, discount in zip(subtotals, discounts)]
    advances = (
        [0] * len(subtotals)
        if is_hold
        else [proportional_share(advance_paid, final, grand_total) for final in final_amounts]
    )
    return CheckoutTotals(
        subtotal_before_discount=subtotal_before_discount,
        discount_amount=discount_amount,
        grand_total=grand_total,
        advance_paid=0 if is_hold else advance_paid,
        allocations=[
            PackageAllocation(
                subtotal=subtotal,
                discount_amount=discount,
                final_amount=final,
                advance_paid=advance,
            )
            for subtotal, discount, final, advance in zip(
                subtotals, discounts, final_amounts, advances
            )
        ],
    )


def minimum_advance(grand_total: int, settings: AgencyBookingSettings) -> int:
    """Capped at the grand total so a small booking can always be paid in full"""
    if settings.use_percentage:
        required = math.ceil(Fraction(grand_total * settings.minimum_advance_percentage, 100))
    else:
        required = settings.minimum_advance_amount
    return max(min(required, grand_total), 0)


def check_hold_permission(role: UserRole, settings: AgencyBookingSettings) -> None:
    if role is UserRole.SALES_AGENT and not settings.allow_agent_hold:
        raise HoldNotPermitted('This agency does not allow agents to hold seats without payment')


def validate_amounts(
    *, subtotal_before_discount: int, discount_amount: int, advance_paid: int, is_hold: bool
) -> None:
    if discount_amount < 0 or discount_amount > subtotal_before_discount:
        raise InvalidPaymentAmount(
            f'Discount {discount_amount} must be between 0 and {subtotal_before_discount}'
        )
    grand_total = subtotal_before_discount - discount_amount
    if not is_hold and (advance_paid < 0 or advance_paid > grand_total):
        raise InvalidPaymentAmount(f'Advance {advance_paid} must be between 0 and {grand_total}')


def check_minimum_advance(
    *, advance_paid: int, grand_total: int, settings: AgencyBookingSettings
) -> int:
    required = minimum_advance(grand_total, settings)
    if advance_paid < required:
        raise InsufficientAdvance(minimum_advance=required, advance_paid=advance_paid)
    return required


def check_transaction_reference(
    *,
    payment_method: PaymentMethod,
    transaction_id: Optional[str],
    settings: AgencyBookingSettings,
) -> None:
    if (
        payment_method.requires_txn
        and settings.require_transaction_id
        and not (transaction_id or '').strip()
    ):
        raise MissingTransactionReference(
            f'Transaction ID is required for {payment_method.label} payments'
        )


def resolve_transaction_id(transaction_id: Optional[str], now: datetime) -> str:
    if transaction_id and transaction_id.strip():
        return transaction_id.strip()
    return f'CASH-{int(now.timestamp() * 1000)}'
