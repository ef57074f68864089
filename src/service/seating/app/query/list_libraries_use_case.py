from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)
from src.service.seating.app.dto.library_listing import CampusStats, LibraryListing
from src.service.seating.app.interface.i_seat_store import ISeatStore


class ListLibrariesUseCase:
    """Roster in seed order plus campus totals, swept first so no stale hold is shown"""

    def __init__(
        self,
        *,
        seat_store: ISeatStore,
        reconcile_use_case: ReconcileExpirationsUseCase,
    ) -> None:
        self.seat_store = seat_store
        self.reconcile_use_case = reconcile_use_case

    @classmethod
    @inject
    def depends(
        cls,
        seat_store: ISeatStore = Depends(Provide[Container.seat_store]),
        reconcile_use_case: ReconcileExpirationsUseCase = Depends(
            Provide[Container.reconcile_expirations_use_case]
        ),
    ) -> Self:
        return cls(seat_store=seat_store, reconcile_use_case=reconcile_use_case)

    @Logger.io
    async def execute(self) -> LibraryListing:
        report = await self.reconcile_use_case.execute()
        read = await self.seat_store.list_libraries()
        return LibraryListing(
            libraries=read.value,
            stats=CampusStats.from_libraries(read.value),
            degraded=read.degraded or report.degraded,
        )
