from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.value_object.ledger_outcome import ReservationOutcome


class CreateBookingUseCase:
    """
    Reserve one seat at a library for a student.

    Flow:
    1. Generate UUID7 booking_id
    2. Load the library's ledger under the library lock
    3. Sweep lapsed reservations and sessions so they do not hold seats
    4. Let the aggregate check seats and the duplicate guard, then decrement
    5. Commit library record + ledger partition in one write

    A rejected request (no seats, duplicate, unknown library) books nothing;
    only releases found by the sweep are written.
    """

    def __init__(
        self,
        *,
        seat_store: ISeatStore,
        clock: IClock,
        library_locks: KeyedAsyncLock,
        settings: Settings,
    ) -> None:
        self.seat_store = seat_store
        self.clock = clock
        self.library_locks = library_locks
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        seat_store: ISeatStore = Depends(Provide[Container.seat_store]),
        clock: IClock = Depends(Provide[Container.clock]),
        library_locks: KeyedAsyncLock = Depends(Provide[Container.library_locks]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            seat_store=seat_store,
            clock=clock,
            library_locks=library_locks,
            settings=settings,
        )

    @Logger.io
    async def create_booking(self, *, library_id: str, student: StudentProfile) -> ReservationOutcome:
        """
        Args:
            library_id: Library to book at
            student: Identity copied onto the booking record

        Returns:
            The created pending booking, or the failure that prevented it

        Raises:
            DomainError: If the student profile is incomplete
            StorageUnavailableError: If the ledger cannot be read or written
        """
        student.validate_complete()
        library_id = library_id.strip()
        booking_id = str(uuid_utils.uuid7())

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.id': booking_id, 'library.id': library_id},
        ):
            async with self.library_locks.hold(library_id):
                read = await self.seat_store.load_ledger(library_id=library_id)
                if read.degraded:
                    raise StorageUnavailableError('Seat store unavailable, booking refused')

                ledger = read.value
                if ledger is None:
                    outcome = ReservationOutcome.rejected(BookingFailure.LIBRARY_NOT_FOUND)
                else:
                    now = self.clock.now()
                    sweep = ledger.reconcile(now=now)
                    outcome = ledger.reserve(
                        booking_id=booking_id,
                        student=student,
                        now=now,
                        reserve_window=self.settings.RESERVE_WINDOW,
                    )
                    if outcome.succeeded or sweep.released_seats:
                        await self.seat_store.commit_ledger(ledger=ledger)
                        metrics.record_sweep(
                            library_id=library_id,
                            expired=len(sweep.expired),
                            completed=len(sweep.completed),
                            available=ledger.library.available_spots,
                        )

            if outcome.succeeded:
                metrics.record_booking_request(library_id=library_id, result='created')
                Logger.base.info(
                    f'📝 [CREATE-BOOKING] {booking_id} for {student.student_id} at {library_id}'
                )
            else:
                metrics.record_booking_request(library_id=library_id, result=outcome.failure)
                Logger.base.info(
                    f'🚫 [CREATE-BOOKING] Rejected {student.student_id} at {library_id}: {outcome.failure}'
                )
            return outcome
