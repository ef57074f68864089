"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)
from src.service.seating.driven_adapter.clock.system_clock import SystemClock
from src.service.seating.driven_adapter.store.seat_store_factory import build_seat_store
from src.service.seating.driving_adapter.scheduler.expiry_sweeper import ExpirySweeper


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Infrastructure
    clock = providers.Singleton(SystemClock)

    # Memory or Kvrocks, chosen by STORE_BACKEND (Kvrocks client resolved per call)
    seat_store = providers.Singleton(build_seat_store, settings=config_service)

    # One asyncio lock per library id, shared by every mutating use case
    library_locks = providers.Singleton(KeyedAsyncLock)

    # Expiry sweep (shared by read use cases, the admin endpoint and the timer)
    reconcile_expirations_use_case = providers.Singleton(
        ReconcileExpirationsUseCase,
        seat_store=seat_store,
        clock=clock,
        library_locks=library_locks,
    )

    expiry_sweeper = providers.Singleton(
        ExpirySweeper,
        reconcile_use_case=reconcile_expirations_use_case,
        interval=config_service.provided.EXPIRY_SWEEP_INTERVAL_SECONDS,
    )


container = Container()


def setup() -> None:
    container.config_service()
    container.seat_store()


def cleanup() -> None:
    container.reset_singletons()
