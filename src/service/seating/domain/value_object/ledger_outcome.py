"""
Results of booking-engine operations.

Business outcomes are returned as values; only programming errors and
storage faults travel as exceptions.
"""

from typing import Optional

import attrs

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.enum.scan_outcome import ScanOutcome


@attrs.define(frozen=True)
class ReservationOutcome:
    booking: Optional[Booking] = None
    failure: Optional[BookingFailure] = None

    @classmethod
    def created(cls, booking: Booking) -> 'ReservationOutcome':
        return cls(booking=booking)

    @classmethod
    def rejected(cls, failure: BookingFailure) -> 'ReservationOutcome':
        return cls(failure=failure)

    @property
    def succeeded(self) -> bool:
        return self.booking is not None


@attrs.define(frozen=True)
class ScanResult:
    outcome: ScanOutcome
    booking: Optional[Booking] = None

    @property
    def changed_state(self) -> bool:
        return self.outcome != ScanOutcome.NO_ACTIVE_BOOKING


@attrs.define(frozen=True)
class LibrarySweep:
    """Transitions one reconcile pass applied to a single library"""

    library: Library
    expired: tuple[Booking, ...] = ()
    completed: tuple[Booking, ...] = ()

    @property
    def released_seats(self) -> int:
        return len(self.expired) + len(self.completed)


@attrs.define(frozen=True)
class ReconcileReport:
    sweeps: tuple[LibrarySweep, ...] = ()
    degraded: bool = False

    @property
    def released_seats(self) -> int:
        return sum(sweep.released_seats for sweep in self.sweeps)

    @property
    def released_by_library(self) -> dict[str, int]:
        return {
            sweep.library.id: sweep.released_seats
            for sweep in self.sweeps
            if sweep.released_seats
        }


@attrs.define(frozen=True)
class AdminReleaseOutcome:
    library: Library
    released: tuple[Booking, ...] = ()

    @property
    def released_count(self) -> int:
        return len(self.released)
