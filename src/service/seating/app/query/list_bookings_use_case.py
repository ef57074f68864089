from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)
from src.service.seating.app.dto.booking_history import BookingHistory
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus


def _newest_first(bookings: List[Booking]) -> List[Booking]:
    return sorted(bookings, key=lambda b: (b.booked_at, b.id), reverse=True)


class ListBookingsUseCase:
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
    async def list_bookings(self, *, student_id: Optional[str] = None) -> BookingHistory:
        report = await self.reconcile_use_case.execute()
        read = await self.seat_store.list_bookings()

        bookings = read.value
        if student_id is not None:
            bookings = [b for b in bookings if b.student_id == student_id]
        return BookingHistory(
            bookings=_newest_first(bookings),
            degraded=read.degraded or report.degraded,
        )

    @Logger.io
    async def get_pending_booking(self, *, student_id: str) -> Optional[Booking]:
        """The student's most recent reservation still waiting for a scan"""
        history = await self.list_bookings(student_id=student_id)
        return next(
            (b for b in history.bookings if b.status == BookingStatus.PENDING),
            None,
        )
