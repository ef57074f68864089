"""Seating Domain Enums"""

from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.enum.booking_status import ACTIVE_BOOKING_STATUSES, BookingStatus
from src.service.seating.domain.enum.release_reason import ReleaseReason
from src.service.seating.domain.enum.scan_outcome import ScanOutcome
from src.service.seating.domain.enum.spot_status import SpotStatus

__all__ = [
    'ACTIVE_BOOKING_STATUSES',
    'BookingFailure',
    'BookingStatus',
    'ReleaseReason',
    'ScanOutcome',
    'SpotStatus',
]
