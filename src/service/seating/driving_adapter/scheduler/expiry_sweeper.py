import anyio

from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)


class ExpirySweeper:
    """
    Runs the expiry sweep on a fixed interval inside the lifespan task group.

    Reads sweep on their own; the timer only keeps stored counts fresh when
    nobody is reading.
    """

    def __init__(self, *, reconcile_use_case: ReconcileExpirationsUseCase, interval: float) -> None:
        self.reconcile_use_case = reconcile_use_case
        self.interval = interval

    @property
    def enabled(self) -> bool:
        return self.interval > 0

    async def sweep_once(self) -> None:
        try:
            await self.reconcile_use_case.execute()
        except Exception as e:
            # Keep the timer alive; the next tick retries
            Logger.base.warning(f'⚠️ [SWEEPER] Sweep failed: {e}')

    async def start_polling(self) -> None:
        if not self.enabled:
            Logger.base.info('⏭️ [SWEEPER] Disabled (EXPIRY_SWEEP_INTERVAL_SECONDS=0)')
            return

        Logger.base.info(f'🔄 [SWEEPER] Sweeping every {self.interval}s')
        while True:
            await anyio.sleep(self.interval)
            await self.sweep_once()
