"""
Unit tests for LibrarySeatLedger

Covers the seat lifecycle end to end on one library:
reserve -> scan in -> scan out, reservation expiry, session end, admin release,
and the seat invariant after every step.
"""

from datetime import timedelta

import attrs
import pytest

from src.platform.exception.exceptions import DomainError
from src.service.seating.domain.aggregate.library_seat_ledger_aggregate import LibrarySeatLedger
from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.enum.scan_outcome import ScanOutcome


RESERVE = timedelta(minutes=6)
SESSION = timedelta(hours=4)


def _reserve(ledger, student, now, booking_id='b-1'):
    return ledger.reserve(booking_id=booking_id, student=student, now=now, reserve_window=RESERVE)


def _checked_in(ledger, student, now, booking_id='b-1'):
    _reserve(ledger, student, now, booking_id)
    ledger.scan(student_id=student.student_id, now=now, session_window=SESSION)
    return ledger


@pytest.mark.unit
class TestReserve:
    def test_last_seat_then_no_seats(self, make_ledger, student, other_student, now):
        """A single seat goes to the first student; the next request gets no_seats"""
        ledger = make_ledger(total_spots=1)

        first = _reserve(ledger, student, now)
        second = _reserve(ledger, other_student, now, booking_id='b-2')

        assert first.succeeded
        assert first.booking.status == BookingStatus.PENDING
        assert ledger.library.available_spots == 0
        assert not second.succeeded
        assert second.failure == BookingFailure.NO_SEATS
        assert len(ledger.bookings) == 1
        assert ledger.is_consistent

    def test_duplicate_pending_is_rejected_without_mutation(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=3)
        _reserve(ledger, student, now)
        before = (ledger.library, list(ledger.bookings))

        outcome = _reserve(ledger, student, now, booking_id='b-2')

        assert outcome.failure == BookingFailure.DUPLICATE_ACTIVE_BOOKING
        assert (ledger.library, ledger.bookings) == before

    def test_duplicate_confirmed_is_rejected(self, make_ledger, student, now):
        ledger = _checked_in(make_ledger(total_spots=3), student, now)

        outcome = _reserve(ledger, student, now, booking_id='b-2')

        assert outcome.failure == BookingFailure.DUPLICATE_ACTIVE_BOOKING

    def test_no_seats_is_checked_before_duplicate(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=1)
        _reserve(ledger, student, now)

        assert _reserve(ledger, student, now, booking_id='b-2').failure == BookingFailure.NO_SEATS

    def test_rebook_after_terminal_booking(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=1)
        _reserve(ledger, student, now)
        ledger.reconcile(now=now + RESERVE + timedelta(seconds=1))

        outcome = _reserve(ledger, student, now + timedelta(minutes=10), booking_id='b-2')

        assert outcome.succeeded
        assert ledger.is_consistent


@pytest.mark.unit
class TestScan:
    def test_scan_in_time_checks_in_without_inventory_change(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=2)
        _reserve(ledger, student, now)
        scan_at = now + timedelta(minutes=2)

        result = ledger.scan(student_id=student.student_id, now=scan_at, session_window=SESSION)

        assert result.outcome == ScanOutcome.CHECKED_IN
        assert result.booking.status == BookingStatus.CONFIRMED
        assert result.booking.checked_in_at == scan_at
        assert result.booking.session_ends_at == scan_at + SESSION
        assert ledger.library.available_spots == 1
        assert ledger.is_consistent

    def test_second_scan_checks_out_and_returns_seat(self, make_ledger, student, now):
        ledger = _checked_in(make_ledger(total_spots=2), student, now)
        out_at = now + timedelta(hours=1)

        result = ledger.scan(student_id=student.student_id, now=out_at, session_window=SESSION)

        assert result.outcome == ScanOutcome.CHECKED_OUT
        assert result.booking.status == BookingStatus.COMPLETED
        assert result.booking.checked_out_at == out_at
        assert ledger.library.available_spots == 2
        assert ledger.is_consistent

    def test_checkout_never_overfills(self, make_ledger, student, now):
        ledger = _checked_in(make_ledger(total_spots=1), student, now)
        # Inventory drifted to full capacity (e.g. a manual correction)
        ledger.library = attrs.evolve(ledger.library, available_spots=1)

        ledger.scan(student_id=student.student_id, now=now, session_window=SESSION)

        assert ledger.library.available_spots == 1

    def test_late_scan_reveals_expiry(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=1)
        _reserve(ledger, student, now)

        result = ledger.scan(
            student_id=student.student_id,
            now=now + RESERVE + timedelta(seconds=1),
            session_window=SESSION,
        )

        assert result.outcome == ScanOutcome.RESERVATION_EXPIRED
        assert result.booking.status == BookingStatus.EXPIRED
        assert ledger.library.available_spots == 1

    def test_scan_exactly_at_deadline_still_checks_in(self, make_ledger, student, now):
        ledger = make_ledger()
        _reserve(ledger, student, now)

        result = ledger.scan(student_id=student.student_id, now=now + RESERVE, session_window=SESSION)

        assert result.outcome == ScanOutcome.CHECKED_IN

    def test_scan_without_booking(self, make_ledger, student, other_student, now):
        ledger = make_ledger()
        _reserve(ledger, other_student, now)
        before = list(ledger.bookings)

        result = ledger.scan(student_id=student.student_id, now=now, session_window=SESSION)

        assert result.outcome == ScanOutcome.NO_ACTIVE_BOOKING
        assert result.booking is None
        assert not result.changed_state
        assert ledger.bookings == before

    def test_confirmed_wins_over_newer_pending(self, make_ledger, student, now):
        """Should a student somehow hold both, the scan checks out first"""
        ledger = _checked_in(make_ledger(total_spots=3), student, now)
        newer = _reserve(ledger, student, now, booking_id='b-x')
        assert newer.failure == BookingFailure.DUPLICATE_ACTIVE_BOOKING
        # Force a second active record to exercise the ordering
        pending = attrs.evolve(
            ledger.bookings[0],
            id='b-2',
            status=BookingStatus.PENDING,
            booked_at=now + timedelta(minutes=1),
            checked_in_at=None,
            session_ends_at=None,
        )
        ledger.bookings.append(pending)

        found = ledger.find_active_booking(student_id=student.student_id)

        assert found.id == 'b-1'
        assert found.status == BookingStatus.CONFIRMED

    def test_most_recent_pending_wins_then_larger_id(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=3)
        _reserve(ledger, student, now)
        base = ledger.bookings[0]
        ledger.bookings.append(attrs.evolve(base, id='b-0', booked_at=now + timedelta(minutes=1)))
        ledger.bookings.append(attrs.evolve(base, id='b-9', booked_at=now + timedelta(minutes=1)))

        assert ledger.find_active_booking(student_id=student.student_id).id == 'b-9'


@pytest.mark.unit
class TestReconcile:
    def test_lapsed_reservation_is_expired(self, make_ledger, student, now):
        ledger = make_ledger(total_spots=1)
        _reserve(ledger, student, now)

        sweep = ledger.reconcile(now=now + RESERVE + timedelta(seconds=1))

        assert [b.status for b in sweep.expired] == [BookingStatus.EXPIRED]
        assert sweep.released_seats == 1
        assert ledger.library.available_spots == 1
        assert ledger.is_consistent

    def test_lapsed_session_is_completed(self, make_ledger, student, now):
        ledger = _checked_in(make_ledger(total_spots=2), student, now)
        sweep_at = now + SESSION + timedelta(seconds=1)

        sweep = ledger.reconcile(now=sweep_at)

        assert len(sweep.completed) == 1
        assert sweep.completed[0].checked_out_at == sweep_at
        assert ledger.library.available_spots == 2

    def test_sweep_is_idempotent(self, make_ledger, student, other_student, now):
        ledger = make_ledger(total_spots=3)
        _reserve(ledger, student, now)
        _checked_in(ledger, other_student, now, booking_id='b-2')
        later = now + SESSION + timedelta(minutes=1)

        first = ledger.reconcile(now=later)
        snapshot = (ledger.library, list(ledger.bookings))
        second = ledger.reconcile(now=later)

        assert first.released_seats == 2
        assert second.released_seats == 0
        assert (ledger.library, ledger.bookings) == snapshot

    def test_nothing_lapsed_changes_nothing(self, make_ledger, student, now):
        ledger = make_ledger()
        _reserve(ledger, student, now)

        assert ledger.reconcile(now=now + RESERVE).released_seats == 0
        assert ledger.library.available_spots == 2


@pytest.mark.unit
class TestReleaseConfirmed:
    def test_releases_earliest_booked_first(self, make_ledger, make_student, now):
        """Three checked in, release two: the two oldest go"""
        ledger = make_ledger(total_spots=4)
        for minute, sid in enumerate(['S-1', 'S-2', 'S-3']):
            _checked_in(ledger, make_student(sid), now + timedelta(minutes=minute), booking_id=f'b-{sid}')

        outcome = ledger.release_confirmed(count=2, now=now + timedelta(hours=1))

        assert outcome.released_count == 2
        assert [b.student_id for b in outcome.released] == ['S-1', 'S-2']
        assert all(b.status == BookingStatus.RELEASED for b in outcome.released)
        assert ledger.library.available_spots == 3
        assert ledger.count_with_status(BookingStatus.CONFIRMED) == 1
        assert ledger.is_consistent

    def test_count_beyond_confirmed_releases_all(self, make_ledger, student, other_student, now):
        ledger = _checked_in(make_ledger(total_spots=3), student, now)
        _reserve(ledger, other_student, now, booking_id='b-2')

        outcome = ledger.release_confirmed(count=10, now=now)

        assert outcome.released_count == 1
        # Pending bookings are never force-released
        assert ledger.count_with_status(BookingStatus.PENDING) == 1
        assert ledger.library.available_spots == 2

    def test_negative_count_is_rejected(self, make_ledger, now):
        with pytest.raises(DomainError):
            make_ledger().release_confirmed(count=-1, now=now)


@pytest.mark.unit
def test_foreign_booking_is_rejected(make_ledger, make_library, student, now):
    ledger = make_ledger(library_id='lib-a')
    _reserve(ledger, student, now)

    with pytest.raises(ValueError):
        LibrarySeatLedger(library=make_library('lib-b'), bookings=list(ledger.bookings))
