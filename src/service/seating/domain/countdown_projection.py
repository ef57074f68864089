"""Read-side timers derived from booking deadlines. Pure functions, no state."""

from datetime import datetime
import math
from typing import Optional

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


def seconds_left(deadline: datetime, now: datetime) -> int:
    """Whole seconds until deadline, never negative"""
    return max(0, math.floor((deadline - now).total_seconds()))


def format_countdown(seconds: int) -> str:
    """375 -> '6:15'"""
    minutes, secs = divmod(max(0, seconds), 60)
    return f'{minutes}:{secs:02d}'


def split_hours_minutes(seconds: int) -> tuple[int, int]:
    hours, remainder = divmod(max(0, seconds), 3600)
    return hours, remainder // 60


def format_session_remaining(seconds: int) -> str:
    """14340 -> '3h 59m'"""
    hours, minutes = split_hours_minutes(seconds)
    return f'{hours}h {minutes}m'


def active_deadline(booking: Booking) -> Optional[datetime]:
    """The deadline a countdown should track for this booking, if any"""
    if booking.status == BookingStatus.PENDING:
        return booking.expires_at
    if booking.status == BookingStatus.CONFIRMED:
        return booking.session_ends_at
    return None
