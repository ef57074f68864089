from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.enum.release_reason import ReleaseReason
from src.service.seating.domain.value_object.admin_scope import AdminScope
from src.service.seating.domain.value_object.ledger_outcome import AdminReleaseOutcome


class AdminReleaseSeatsUseCase:
    """Force-release up to `count` checked-in seats, earliest-booked first"""

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

    @classmethod
    @inject
    def depends(
        cls,
        seat_store: ISeatStore = Depends(Provide[Container.seat_store]),
        clock: IClock = Depends(Provide[Container.clock]),
        library_locks: KeyedAsyncLock = Depends(Provide[Container.library_locks]),
    ) -> Self:
        return cls(seat_store=seat_store, clock=clock, library_locks=library_locks)

    @Logger.io
    async def execute(self, *, scope: AdminScope, library_id: str, count: int) -> AdminReleaseOutcome:
        scope.ensure_can_manage(library_id)

        async with self.library_locks.hold(library_id):
            read = await self.seat_store.load_ledger(library_id=library_id)
            if read.degraded:
                raise StorageUnavailableError('Seat store unavailable, release refused')
            if read.value is None:
                raise NotFoundError(f'Library {library_id} not found')

            ledger = read.value
            now = self.clock.now()
            # Lapsed sessions end as completed, not as admin releases
            sweep = ledger.reconcile(now=now)
            outcome = ledger.release_confirmed(count=count, now=now)
            if outcome.released_count or sweep.released_seats:
                await self.seat_store.commit_ledger(ledger=ledger)

        metrics.record_sweep(
            library_id=library_id,
            expired=len(sweep.expired),
            completed=len(sweep.completed),
            available=ledger.library.available_spots,
        )
        metrics.record_release(
            library_id=library_id, reason=ReleaseReason.ADMIN, count=outcome.released_count
        )
        Logger.base.info(
            f'🔓 [ADMIN] Released {outcome.released_count}/{count} seat(s) at {library_id}'
        )
        return outcome
