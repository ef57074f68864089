from enum import StrEnum


class BookingFailure(StrEnum):
    """Expected reasons a create-booking request is turned down (no state is changed)"""

    NO_SEATS = 'no_seats'
    DUPLICATE_ACTIVE_BOOKING = 'duplicate_active_booking'
    LIBRARY_NOT_FOUND = 'library_not_found'

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES = {
    BookingFailure.NO_SEATS: 'No seats available',
    BookingFailure.DUPLICATE_ACTIVE_BOOKING: 'You already have an active booking here',
    BookingFailure.LIBRARY_NOT_FOUND: 'Library not found',
}
