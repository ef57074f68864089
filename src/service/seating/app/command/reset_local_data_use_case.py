from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_seat_store import ISeatStore


class ResetLocalDataUseCase:
    """Wipe roster, ledger and profile; the next read seeds a fresh roster"""

    def __init__(self, *, seat_store: ISeatStore, library_locks: KeyedAsyncLock) -> None:
        self.seat_store = seat_store
        self.library_locks = library_locks

    @classmethod
    @inject
    def depends(
        cls,
        seat_store: ISeatStore = Depends(Provide[Container.seat_store]),
        library_locks: KeyedAsyncLock = Depends(Provide[Container.library_locks]),
    ) -> Self:
        return cls(seat_store=seat_store, library_locks=library_locks)

    @Logger.io
    async def execute(self) -> None:
        roster = await self.seat_store.list_libraries()
        async with self.library_locks.hold_many(library.id for library in roster.value):
            await self.seat_store.clear()
        Logger.base.warning('🗑️ [RESET] All seat data cleared')
