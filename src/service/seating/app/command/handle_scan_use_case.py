from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.enum.release_reason import ReleaseReason
from src.service.seating.domain.enum.scan_outcome import ScanOutcome
from src.service.seating.domain.value_object.ledger_outcome import ScanResult


class HandleScanUseCase:
    """
    Apply an entrance code scan: check in, check out, or reveal an expiry.

    The scanned code is exactly the library id. It carries no signature,
    nonce or expiry, so anyone who can reproduce a library's code (a photo of
    the poster is enough) can check in from anywhere. Closing that gap needs a
    signed, rotating per-scan token issued by the library; until then the code
    is trusted as printed.
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
    async def handle_scan(self, *, code: str, student_id: str) -> ScanResult:
        library_id = code.strip()

        with self.tracer.start_as_current_span(
            'use_case.handle_scan',
            attributes={'library.id': library_id},
        ):
            async with self.library_locks.hold(library_id):
                read = await self.seat_store.load_ledger(library_id=library_id)
                if read.degraded:
                    raise StorageUnavailableError('Seat store unavailable, scan refused')

                ledger = read.value
                if ledger is None:
                    # Unknown code: nothing to resolve against
                    return ScanResult(outcome=ScanOutcome.NO_ACTIVE_BOOKING)

                result = ledger.scan(
                    student_id=student_id,
                    now=self.clock.now(),
                    session_window=self.settings.SESSION_WINDOW,
                )
                if result.changed_state:
                    await self.seat_store.commit_ledger(ledger=ledger)

            metrics.record_scan(library_id=library_id, outcome=result.outcome)
            if result.outcome == ScanOutcome.CHECKED_OUT:
                metrics.record_release(library_id=library_id, reason=ReleaseReason.CHECKOUT)
            elif result.outcome == ScanOutcome.RESERVATION_EXPIRED:
                metrics.record_release(library_id=library_id, reason=ReleaseReason.EXPIRED)
            metrics.update_available_seats(
                library_id=library_id, available=ledger.library.available_spots
            )

            Logger.base.info(f'📷 [SCAN] {student_id} at {library_id}: {result.outcome}')
            return result
