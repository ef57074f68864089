import secrets
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.value_object.admin_scope import AdminScope


def _pins_match(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode(), expected.encode())


class AuthorizeAdminUseCase:
    """
    Resolve an admin PIN to the libraries it may manage.

    The master PIN covers every library; a library PIN covers that library
    only. PINs are plain configuration values compared in memory.
    """

    def __init__(self, *, seat_store: ISeatStore, settings: Settings) -> None:
        self.seat_store = seat_store
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        seat_store: ISeatStore = Depends(Provide[Container.seat_store]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(seat_store=seat_store, settings=settings)

    @Logger.io
    async def execute(self, *, pin: str) -> AdminScope:
        if not pin:
            raise AuthenticationError('Admin PIN is required')

        if _pins_match(pin, self.settings.MASTER_ADMIN_PIN.get_secret_value()):
            Logger.base.info('🔑 [ADMIN] Master PIN accepted')
            return AdminScope.master()

        # Degraded reads fall back to the seed roster, whose PINs still apply
        roster = await self.seat_store.list_libraries()
        for library in roster.value:
            if library.admin_pin and _pins_match(pin, library.admin_pin):
                Logger.base.info(f'🔑 [ADMIN] Library PIN accepted for {library.id}')
                return AdminScope(library_id=library.id)

        raise AuthenticationError('Invalid admin PIN')
