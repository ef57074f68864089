"""
Library Seat Ledger Aggregate - Aggregate Root for one library's seats

[DDD Design Principles]
- LibrarySeatLedger is the Aggregate Root
- Library (inventory counts) and its Bookings are changed together, never apart
- Persisted as one unit: the library record plus its ledger partition

[Business Invariants]
- available_spots + |bookings in pending/confirmed| == total_spots
- A student holds at most one pending/confirmed booking per library
- Released seats are applied as one clamped delta per operation
"""

from datetime import datetime, timedelta
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.enum.scan_outcome import ScanOutcome
from src.service.seating.domain.value_object.ledger_outcome import (
    AdminReleaseOutcome,
    LibrarySweep,
    ReservationOutcome,
    ScanResult,
)


def _validate_partition(instance: 'LibrarySeatLedger', attribute: attrs.Attribute, value: list) -> None:
    foreign = {booking.library_id for booking in value} - {instance.library.id}
    if foreign:
        raise ValueError(f'Ledger for {instance.library.id} holds bookings of {sorted(foreign)}')


@attrs.define
class LibrarySeatLedger:
    library: Library
    bookings: List[Booking] = attrs.field(factory=list, validator=_validate_partition)

    @property
    def active_bookings(self) -> List[Booking]:
        return [booking for booking in self.bookings if booking.is_active]

    @property
    def is_consistent(self) -> bool:
        return self.library.available_spots + len(self.active_bookings) == self.library.total_spots

    def count_with_status(self, status: BookingStatus) -> int:
        return sum(1 for booking in self.bookings if booking.status == status)

    def find_active_booking(self, *, student_id: str) -> Optional[Booking]:
        """
        The student's booking a scan resolves against.

        Ordering: a confirmed booking always wins over a pending one, so a
        scan checks out before it checks in; within the same status the most
        recently booked record wins (booking id breaks exact ties).
        """
        candidates = [b for b in self.bookings if b.is_held_by(student_id=student_id)]
        if not candidates:
            return None
        return max(
            candidates,
            key=lambda b: (b.status == BookingStatus.CONFIRMED, b.booked_at, b.id),
        )

    def _replace(self, updated: Booking) -> None:
        for index, booking in enumerate(self.bookings):
            if booking.id == updated.id:
                self.bookings[index] = updated
                return
        raise DomainError(f'Booking {updated.id} is not in the ledger of {self.library.id}')

    def _return_seats(self, count: int) -> None:
        if count:
            self.library = self.library.adjust_available(count)

    @Logger.io
    def reserve(
        self,
        *,
        booking_id: str,
        student: StudentProfile,
        now: datetime,
        reserve_window: timedelta,
    ) -> ReservationOutcome:
        # Check before mutating; the clamp in adjust_available never signals "full"
        if not self.library.has_free_seat:
            return ReservationOutcome.rejected(BookingFailure.NO_SEATS)
        if self.find_active_booking(student_id=student.student_id) is not None:
            return ReservationOutcome.rejected(BookingFailure.DUPLICATE_ACTIVE_BOOKING)

        booking = Booking.reserve(
            id=booking_id,
            library=self.library,
            student=student,
            now=now,
            reserve_window=reserve_window,
        )
        self.library = self.library.adjust_available(-1)
        self.bookings.append(booking)
        return ReservationOutcome.created(booking)

    @Logger.io
    def scan(self, *, student_id: str, now: datetime, session_window: timedelta) -> ScanResult:
        booking = self.find_active_booking(student_id=student_id)
        if booking is None:
            return ScanResult(outcome=ScanOutcome.NO_ACTIVE_BOOKING)

        if booking.status == BookingStatus.CONFIRMED:
            checked_out = booking.complete(now=now)
            self._replace(checked_out)
            self._return_seats(1)
            return ScanResult(outcome=ScanOutcome.CHECKED_OUT, booking=checked_out)

        # A late scan only reveals an expiry the sweep has not applied yet
        if now > booking.expires_at:
            expired = booking.expire()
            self._replace(expired)
            self._return_seats(1)
            return ScanResult(outcome=ScanOutcome.RESERVATION_EXPIRED, booking=expired)

        # Seat was already taken from the pool at booking time
        checked_in = booking.confirm(now=now, session_window=session_window)
        self._replace(checked_in)
        return ScanResult(outcome=ScanOutcome.CHECKED_IN, booking=checked_in)

    @Logger.io
    def reconcile(self, *, now: datetime) -> LibrarySweep:
        expired: List[Booking] = []
        completed: List[Booking] = []
        for index, booking in enumerate(self.bookings):
            if booking.reservation_lapsed(now=now):
                self.bookings[index] = booking.expire()
                expired.append(self.bookings[index])
            elif booking.session_lapsed(now=now):
                self.bookings[index] = booking.complete(now=now)
                completed.append(self.bookings[index])

        # One bounded delta per library per sweep
        self._return_seats(len(expired) + len(completed))
        return LibrarySweep(library=self.library, expired=tuple(expired), completed=tuple(completed))

    @Logger.io
    def release_confirmed(self, *, count: int, now: datetime) -> AdminReleaseOutcome:
        if count < 0:
            raise DomainError('Release count must not be negative')

        oldest_first = sorted(
            (b for b in self.bookings if b.status == BookingStatus.CONFIRMED),
            key=lambda b: (b.booked_at, b.id),
        )
        released = [booking.release(now=now) for booking in oldest_first[:count]]
        for booking in released:
            self._replace(booking)

        self._return_seats(len(released))
        return AdminReleaseOutcome(library=self.library, released=tuple(released))
