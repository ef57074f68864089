from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.dto.store_read import StoreRead
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.entity.student_profile_entity import StudentProfile


class GetStudentProfileUseCase:
    def __init__(self, *, seat_store: ISeatStore) -> None:
        self.seat_store = seat_store

    @classmethod
    @inject
    def depends(cls, seat_store: ISeatStore = Depends(Provide[Container.seat_store])) -> Self:
        return cls(seat_store=seat_store)

    @Logger.io
    async def execute(self) -> StoreRead[StudentProfile | None]:
        return await self.seat_store.get_student_profile()
