"""
Unit tests for the key-value seat store (in-memory backend)

Seeding, atomic ledger commits, key layout, and degraded reads when a
document is corrupt or the backend faults.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import StorageUnavailableError
from src.service.seating.driven_adapter.store.in_memory_seat_store import InMemorySeatStore


RESERVE = timedelta(minutes=6)


@pytest.mark.unit
class TestSeeding:
    @pytest.mark.asyncio
    async def test_first_read_seeds_roster_in_order(self, seat_store):
        read = await seat_store.list_libraries()

        assert not read.degraded
        assert [library.id for library in read.value] == ['lib-a', 'lib-b']
        assert all(library.available_spots == library.total_spots for library in read.value)
        assert 'test_seat:roster' in seat_store.documents
        assert 'test_seat:bookings:lib-a' in seat_store.documents

    @pytest.mark.asyncio
    async def test_seeding_happens_once(self, seat_store):
        await seat_store.list_libraries()
        seat_store.documents['test_seat:library:lib-b'] = seat_store.documents[
            'test_seat:library:lib-b'
        ].replace(b'"available_spots":1', b'"available_spots":0')

        read = await seat_store.list_libraries()

        assert read.value[1].available_spots == 0

    @pytest.mark.asyncio
    async def test_clear_reseeds_on_next_read(self, seat_store, student):
        await seat_store.save_student_profile(profile=student)
        await seat_store.list_libraries()

        await seat_store.clear()

        assert seat_store.documents == {}
        assert (await seat_store.get_student_profile()).value is None
        assert len((await seat_store.list_libraries()).value) == 2


@pytest.mark.unit
class TestLedgerPersistence:
    @pytest.mark.asyncio
    async def test_unknown_library_has_no_ledger(self, seat_store):
        read = await seat_store.load_ledger(library_id='nowhere')

        assert read.value is None
        assert not read.degraded

    @pytest.mark.asyncio
    async def test_commit_persists_library_and_partition(self, seat_store, student, now):
        ledger = (await seat_store.load_ledger(library_id='lib-a')).value
        ledger.reserve(booking_id='b-1', student=student, now=now, reserve_window=RESERVE)

        await seat_store.commit_ledger(ledger=ledger)

        reloaded = (await seat_store.load_ledger(library_id='lib-a')).value
        assert reloaded.library.available_spots == 2
        assert reloaded.bookings == ledger.bookings
        assert reloaded.bookings[0].expires_at == now + RESERVE
        assert (await seat_store.list_bookings()).value == ledger.bookings

    @pytest.mark.asyncio
    async def test_commit_is_one_multi_key_write(self, seat_store, student, now):
        ledger = (await seat_store.load_ledger(library_id='lib-b')).value
        ledger.reserve(booking_id='b-1', student=student, now=now, reserve_window=RESERVE)
        seat_store._set_many = AsyncMock()

        await seat_store.commit_ledger(ledger=ledger)

        seat_store._set_many.assert_awaited_once()
        (mapping,) = seat_store._set_many.await_args.args
        assert set(mapping) == {'test_seat:library:lib-b', 'test_seat:bookings:lib-b'}

    @pytest.mark.asyncio
    async def test_student_profile_round_trip(self, seat_store, student):
        assert (await seat_store.get_student_profile()).value is None

        await seat_store.save_student_profile(profile=student)

        assert (await seat_store.get_student_profile()).value == student


@pytest.mark.unit
class TestDegradedReads:
    @pytest.mark.asyncio
    async def test_corrupt_roster_falls_back_to_seed(self, seat_store):
        seat_store.documents['test_seat:roster'] = b'{not json'

        read = await seat_store.list_libraries()

        assert read.degraded
        assert [library.id for library in read.value] == ['lib-a', 'lib-b']

    @pytest.mark.asyncio
    async def test_corrupt_partition_degrades_ledger_and_history(self, seat_store):
        await seat_store.list_libraries()
        seat_store.documents['test_seat:bookings:lib-a'] = b'[{"id": "b-1"}]'

        ledger_read = await seat_store.load_ledger(library_id='lib-a')
        history_read = await seat_store.list_bookings()

        assert ledger_read.degraded
        assert ledger_read.value.library.id == 'lib-a'
        assert ledger_read.value.bookings == []
        assert history_read.degraded
        assert history_read.value == []

    @pytest.mark.asyncio
    async def test_corrupt_profile_reads_as_absent(self, seat_store):
        seat_store.documents['test_seat:student'] = b'"just a string"'

        read = await seat_store.get_student_profile()

        assert read.degraded
        assert read.value is None

    @pytest.mark.asyncio
    async def test_backend_fault_degrades_reads(self, seed_libraries):
        store = InMemorySeatStore(seed_roster=seed_libraries)
        store._get_many = AsyncMock(side_effect=StorageUnavailableError('down'))

        libraries = await store.list_libraries()
        ledger = await store.load_ledger(library_id='lib-b')

        assert libraries.degraded and len(libraries.value) == 2
        assert ledger.degraded and ledger.value.library.id == 'lib-b'

    @pytest.mark.asyncio
    async def test_backend_fault_on_write_raises(self, seat_store, student):
        seat_store._set_many = AsyncMock(side_effect=StorageUnavailableError('down'))

        with pytest.raises(StorageUnavailableError):
            await seat_store.save_student_profile(profile=student)
