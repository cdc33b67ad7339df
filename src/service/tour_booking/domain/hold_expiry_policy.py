"""
Hold Expiry Policy

Timestamp arithmetic for hold bookings. The policy never runs a timer: an
external scheduler calls ``ReleaseExpiredHoldsUseCase`` which applies the
release contract below.

Release contract, once ``is_expired`` is true for a hold booking:
    - every seat still blocked for that booking goes back to ``available``
    - the booking moves to ``expired``
"""

from datetime import datetime, timedelta

from src.platform.config.core_setting import settings
from src.service.tour_booking.domain.enum.hold_urgency import HoldUrgency


def hold_expires_at(now: datetime, hold_duration_minutes: int) -> datetime:
    return now + timedelta(minutes=hold_duration_minutes)


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return now >= expires_at


def time_remaining(expires_at: datetime, now: datetime) -> timedelta:
    return max(expires_at - now, timedelta(0))


def urgency(
    expires_at: datetime,
    now: datetime,
    *,
    critical_minutes: int = settings.HOLD_CRITICAL_MINUTES,
    warning_minutes: int = settings.HOLD_WARNING_MINUTES,
) -> HoldUrgency:
    if is_expired(expires_at, now):
        return HoldUrgency.EXPIRED
    remaining = expires_at - now
    if remaining <= timedelta(minutes=critical_minutes):
        return HoldUrgency.CRITICAL
    if remaining <= timedelta(minutes=warning_minutes):
        return HoldUrgency.WARNING
    return HoldUrgency.NORMAL


def format_remaining(remaining: timedelta) -> str:
    """``MM:SS`` under an hour, ``H:MM:SS`` otherwise"""
    total_seconds = max(int(remaining.total_seconds()), 0)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f'{hours}:{minutes:02d}:{seconds:02d}'
    return f'{minutes:02d}:{seconds:02d}'
