"""
Seating fixtures: a frozen clock, small libraries and students, and an
in-memory seat store seeded with them.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from src.platform.config.core_setting import Settings
from src.platform.state.keyed_lock import KeyedAsyncLock
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.domain.aggregate.library_seat_ledger_aggregate import LibrarySeatLedger
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.driven_adapter.store.in_memory_seat_store import InMemorySeatStore


T0 = datetime(2025, 1, 10, 10, 30, tzinfo=timezone.utc)
RESERVE_WINDOW = timedelta(minutes=6)
SESSION_WINDOW = timedelta(hours=4)


class FrozenClock(IClock):
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def now() -> datetime:
    return T0


@pytest.fixture
def frozen_clock() -> FrozenClock:
    return FrozenClock(T0)


@pytest.fixture
def settings() -> Settings:
    return Settings(RESERVE_WINDOW_MINUTES=6, SESSION_WINDOW_HOURS=4, MASTER_ADMIN_PIN='1234')


@pytest.fixture
def make_library() -> Callable[..., Library]:
    def _make(
        library_id: str = 'lib-a',
        *,
        total_spots: int = 3,
        available_spots: int | None = None,
        admin_pin: str = '1111',
    ) -> Library:
        return Library(
            id=library_id,
            name=f'Library {library_id}',
            building='Main Block',
            total_spots=total_spots,
            available_spots=total_spots if available_spots is None else available_spots,
            admin_pin=admin_pin,
        )

    return _make


@pytest.fixture
def make_student() -> Callable[..., StudentProfile]:
    def _make(student_id: str = 'S-100', name: str = 'Asha Rawat') -> StudentProfile:
        return StudentProfile(
            name=name,
            student_id=student_id,
            department='CSE',
            year='3',
            section='A',
        )

    return _make


@pytest.fixture
def student(make_student: Callable[..., StudentProfile]) -> StudentProfile:
    return make_student()


@pytest.fixture
def other_student(make_student: Callable[..., StudentProfile]) -> StudentProfile:
    return make_student(student_id='S-200', name='Rohan Negi')


@pytest.fixture
def make_ledger(make_library: Callable[..., Library]) -> Callable[..., LibrarySeatLedger]:
    def _make(total_spots: int = 3, library_id: str = 'lib-a') -> LibrarySeatLedger:
        return LibrarySeatLedger(library=make_library(library_id, total_spots=total_spots))

    return _make


@pytest.fixture
def seed_libraries(make_library: Callable[..., Library]) -> list[Library]:
    return [
        make_library('lib-a', total_spots=3, admin_pin='1111'),
        make_library('lib-b', total_spots=1, admin_pin='2222'),
    ]


@pytest.fixture
def seat_store(seed_libraries: list[Library]) -> InMemorySeatStore:
    return InMemorySeatStore(seed_roster=seed_libraries, key_prefix='test_')


@pytest.fixture
def library_locks() -> KeyedAsyncLock:
    return KeyedAsyncLock()
