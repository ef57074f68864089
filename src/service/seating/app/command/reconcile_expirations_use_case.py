"""
Reconcile Expirations Use Case - the expiry sweep

Runs opportunistically before every library or booking read, from the admin
reconcile endpoint, and from ExpirySweeper when a sweep interval is set.
Create-booking and admin-release sweep their own library inline, under the
same lock as the mutation.
"""

from typing import List

from opentelemetry import trace

from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.value_object.ledger_outcome import LibrarySweep, ReconcileReport


class ReconcileExpirationsUseCase:
    """
    Expire lapsed reservations and complete lapsed sessions, library by library.

    Each library is swept under its own lock and committed on its own, so a
    sweep never blocks bookings at other libraries. Libraries whose snapshot is
    degraded, or whose commit fails, are skipped and the report is flagged
    degraded; the next sweep picks them up again.
    """

    def __init__(
        self,
        *,
        seat_store: ISeatStore,
        clock: IClock,
        library_locks: KeyedAsyncLock,
    ) -> None:
        self.seat_store = seat_store
        self.clock = clock
        self.library_locks = library_locks
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self) -> ReconcileReport:
        with self.tracer.start_as_current_span('use_case.reconcile_expirations'):
            roster = await self.seat_store.list_libraries()
            if roster.degraded:
                Logger.base.warning('⚠️ [SWEEP] Roster unreadable, sweep skipped')
                return ReconcileReport(degraded=True)

            now = self.clock.now()
            sweeps: List[LibrarySweep] = []
            degraded = False
            for library in roster.value:
                async with self.library_locks.hold(library.id):
                    read = await self.seat_store.load_ledger(library_id=library.id)
                    if read.degraded or read.value is None:
                        degraded = True
                        continue

                    ledger = read.value
                    sweep = ledger.reconcile(now=now)
                    if not sweep.released_seats:
                        continue

                    try:
                        await self.seat_store.commit_ledger(ledger=ledger)
                    except StorageUnavailableError as e:
                        Logger.base.warning(f'⚠️ [SWEEP] {library.id} not committed: {e.message}')
                        degraded = True
                        continue

                sweeps.append(sweep)
                self._record(sweep)

            report = ReconcileReport(sweeps=tuple(sweeps), degraded=degraded)
            if report.released_seats:
                Logger.base.info(
                    f'🧹 [SWEEP] Released {report.released_seats} seat(s): {report.released_by_library}'
                )
            return report

    @staticmethod
    def _record(sweep: LibrarySweep) -> None:
        metrics.record_sweep(
            library_id=sweep.library.id,
            expired=len(sweep.expired),
            completed=len(sweep.completed),
            available=sweep.library.available_spots,
        )
