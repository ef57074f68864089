from enum import StrEnum


class ScanOutcome(StrEnum):
    CHECKED_IN = 'checked_in'
    CHECKED_OUT = 'checked_out'
    RESERVATION_EXPIRED = 'reservation_expired'
    NO_ACTIVE_BOOKING = 'no_active_booking'
