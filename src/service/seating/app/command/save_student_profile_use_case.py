from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.entity.student_profile_entity import StudentProfile


class SaveStudentProfileUseCase:
    def __init__(self, *, seat_store: ISeatStore) -> None:
        self.seat_store = seat_store

    @classmethod
    @inject
    def depends(cls, seat_store: ISeatStore = Depends(Provide[Container.seat_store])) -> Self:
        return cls(seat_store=seat_store)

    @Logger.io
    async def execute(self, *, profile: StudentProfile) -> StudentProfile:
        # Existing bookings keep the identity copied when they were made
        profile.validate_complete()
        await self.seat_store.save_student_profile(profile=profile)
        return profile
