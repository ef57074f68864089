from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)
from src.service.seating.app.dto.library_listing import LibraryOccupancy
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.value_object.admin_scope import AdminScope


class ListLibraryOccupancyUseCase:
    """Admin dashboard: each library in scope with its waiting and checked-in counts"""

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
    async def execute(self, *, scope: AdminScope) -> List[LibraryOccupancy]:
        await self.reconcile_use_case.execute()
        roster = await self.seat_store.list_libraries()

        occupancy: List[LibraryOccupancy] = []
        for library in roster.value:
            if not scope.can_manage(library.id):
                continue
            read = await self.seat_store.load_ledger(library_id=library.id)
            if read.value is None:
                continue
            ledger = read.value
            occupancy.append(
                LibraryOccupancy(
                    library=ledger.library,
                    pending_count=ledger.count_with_status(BookingStatus.PENDING),
                    confirmed_count=ledger.count_with_status(BookingStatus.CONFIRMED),
                )
            )
        return occupancy
