from datetime import datetime, timedelta
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class Booking:
    """
    One seat reservation at one library.

    Student identity is copied at booking time, not joined live, so later
    profile edits never rewrite history. Records are never deleted; every
    transition returns an evolved copy.
    """

    id: str
    library_id: str
    library_name: str
    building: str
    student_name: str
    student_id: str
    department: str
    year: str
    section: str
    booked_at: datetime
    expires_at: datetime
    status: BookingStatus = BookingStatus.PENDING
    checked_in_at: Optional[datetime] = None
    session_ends_at: Optional[datetime] = None
    checked_out_at: Optional[datetime] = None

    @classmethod
    def reserve(
        cls,
        *,
        id: str,
        library: Library,
        student: StudentProfile,
        now: datetime,
        reserve_window: timedelta,
    ) -> 'Booking':
        return cls(
            id=id,
            library_id=library.id,
            library_name=library.name,
            building=library.building,
            student_name=student.name,
            student_id=student.student_id,
            department=student.department,
            year=student.year,
            section=student.section,
            status=BookingStatus.PENDING,
            booked_at=now,
            expires_at=now + reserve_window,
        )

    @property
    def is_active(self) -> bool:
        return self.status.holds_seat

    def is_held_by(self, *, student_id: str) -> bool:
        return self.is_active and self.student_id == student_id

    def reservation_lapsed(self, *, now: datetime) -> bool:
        return self.status == BookingStatus.PENDING and self.expires_at < now

    def session_lapsed(self, *, now: datetime) -> bool:
        return (
            self.status == BookingStatus.CONFIRMED
            and self.session_ends_at is not None
            and self.session_ends_at < now
        )

    def _require_status(self, expected: BookingStatus, action: str) -> None:
        if self.status != expected:
            raise DomainError(f'Cannot {action} a {self.status} booking')

    def confirm(self, *, now: datetime, session_window: timedelta) -> 'Booking':
        self._require_status(BookingStatus.PENDING, 'check in')
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            checked_in_at=now,
            session_ends_at=now + session_window,
        )

    def expire(self) -> 'Booking':
        self._require_status(BookingStatus.PENDING, 'expire')
        return attrs.evolve(self, status=BookingStatus.EXPIRED)

    def complete(self, *, now: datetime) -> 'Booking':
        self._require_status(BookingStatus.CONFIRMED, 'check out')
        return attrs.evolve(self, status=BookingStatus.COMPLETED, checked_out_at=now)

    def release(self, *, now: datetime) -> 'Booking':
        self._require_status(BookingStatus.CONFIRMED, 'release')
        return attrs.evolve(self, status=BookingStatus.RELEASED, checked_out_at=now)
