from enum import StrEnum


class BookingStatus(StrEnum):
    """
    pending   -> booked in app, waiting for the entrance scan
    confirmed -> scanned in, seat occupied until checkout or session end
    completed -> scanned out, or session window ran out
    expired   -> not scanned within the reservation window
    released  -> force-released by a library admin
    """

    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    COMPLETED = 'completed'
    EXPIRED = 'expired'
    RELEASED = 'released'

    @property
    def holds_seat(self) -> bool:
        return self in ACTIVE_BOOKING_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not self.holds_seat


ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
