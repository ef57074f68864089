"""
Key-Value Seat Store

Document layout (every key carries the configured prefix):
    seat:roster               JSON list of library ids, in seed order
    seat:library:{id}         one library record
    seat:bookings:{id}        that library's ledger partition
    seat:student              the student profile

Backends only provide multi-key get, atomic multi-key set and clear; the
seeding, decoding and degraded-read fallbacks live here.
"""

from abc import abstractmethod
import asyncio
from typing import Dict, List, Optional, Sequence

from src.platform.exception.exceptions import StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.seating_metrics import metrics
from src.service.seating.app.dto.store_read import StoreRead
from src.service.seating.app.interface.i_seat_store import ISeatStore
from src.service.seating.domain.aggregate.library_seat_ledger_aggregate import LibrarySeatLedger
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.driven_adapter.store.seat_document_codec import (
    SeatDocumentError,
    decode_bookings,
    decode_library,
    decode_roster,
    decode_student_profile,
    encode_bookings,
    encode_library,
    encode_roster,
    encode_student_profile,
)


ROSTER_KEY = 'seat:roster'
STUDENT_KEY = 'seat:student'


class KeyValueSeatStore(ISeatStore):
    def __init__(self, *, seed_roster: Sequence[Library], key_prefix: str = '') -> None:
        self.seed_roster = list(seed_roster)
        self.key_prefix = key_prefix
        self._seed_lock = asyncio.Lock()

    # ========== Backend primitives ==========

    @abstractmethod
    async def _get_many(self, keys: List[str]) -> List[Optional[bytes | str]]:
        """Values in key order, None for missing keys; StorageUnavailableError on fault"""
        pass

    @abstractmethod
    async def _set_many(self, mapping: Dict[str, bytes]) -> None:
        """Write every key or none of them; StorageUnavailableError on fault"""
        pass

    @abstractmethod
    async def _clear_all(self) -> None:
        pass

    # ========== Keys ==========

    def _key(self, key: str) -> str:
        return f'{self.key_prefix}{key}'

    def _library_key(self, library_id: str) -> str:
        return self._key(f'seat:library:{library_id}')

    def _bookings_key(self, library_id: str) -> str:
        return self._key(f'seat:bookings:{library_id}')

    # ========== Seeding ==========

    async def _roster_ids(self) -> List[str]:
        (raw,) = await self._get_many([self._key(ROSTER_KEY)])
        if raw is not None:
            return decode_roster(raw)

        async with self._seed_lock:
            # Another task may have seeded while we waited
            (raw,) = await self._get_many([self._key(ROSTER_KEY)])
            if raw is not None:
                return decode_roster(raw)
            return await self._seed()

    async def _seed(self) -> List[str]:
        mapping: Dict[str, bytes] = {}
        for library in self.seed_roster:
            mapping[self._library_key(library.id)] = encode_library(library)
            mapping[self._bookings_key(library.id)] = encode_bookings([])
        ids = [library.id for library in self.seed_roster]
        mapping[self._key(ROSTER_KEY)] = encode_roster(ids)
        await self._set_many(mapping)
        Logger.base.info(f'🌱 [SEAT-STORE] Seeded roster with {len(ids)} libraries')
        return ids

    def _degraded(self, document: str, error: Exception) -> None:
        Logger.base.warning(f'⚠️ [SEAT-STORE] Degraded read of {document}: {error}')
        metrics.record_degraded_read(document=document)

    def _seed_library(self, library_id: str) -> Optional[Library]:
        return next((library for library in self.seed_roster if library.id == library_id), None)

    # ========== ISeatStore ==========

    async def list_libraries(self) -> StoreRead[List[Library]]:
        try:
            ids = await self._roster_ids()
            raws = await self._get_many([self._library_key(library_id) for library_id in ids])
            libraries = [decode_library(raw) for raw in raws if raw is not None]
            if len(libraries) != len(ids):
                raise SeatDocumentError('Roster lists a library with no record')
            return StoreRead(value=libraries)
        except (StorageUnavailableError, SeatDocumentError) as e:
            self._degraded('roster', e)
            return StoreRead(value=list(self.seed_roster), degraded=True)

    async def load_ledger(self, *, library_id: str) -> StoreRead[Optional[LibrarySeatLedger]]:
        try:
            await self._roster_ids()
            raw_library, raw_bookings = await self._get_many(
                [self._library_key(library_id), self._bookings_key(library_id)]
            )
            if raw_library is None:
                return StoreRead(value=None)

            library = decode_library(raw_library)
            bookings = decode_bookings(raw_bookings) if raw_bookings is not None else []
            return StoreRead(value=LibrarySeatLedger(library=library, bookings=bookings))
        except (StorageUnavailableError, ValueError) as e:  # Undecodable or mismatched partition
            self._degraded(f'ledger:{library_id}', e)
            seed = self._seed_library(library_id)
            fallback = LibrarySeatLedger(library=seed) if seed is not None else None
            return StoreRead(value=fallback, degraded=True)

    async def list_bookings(self) -> StoreRead[List[Booking]]:
        try:
            ids = await self._roster_ids()
            raws = await self._get_many([self._bookings_key(library_id) for library_id in ids])
            bookings: List[Booking] = []
            for raw in raws:
                if raw is not None:
                    bookings.extend(decode_bookings(raw))
            return StoreRead(value=bookings)
        except (StorageUnavailableError, SeatDocumentError) as e:
            self._degraded('bookings', e)
            return StoreRead(value=[], degraded=True)

    async def commit_ledger(self, *, ledger: LibrarySeatLedger) -> None:
        library = ledger.library
        await self._set_many(
            {
                self._library_key(library.id): encode_library(library),
                self._bookings_key(library.id): encode_bookings(ledger.bookings),
            }
        )

    async def get_student_profile(self) -> StoreRead[Optional[StudentProfile]]:
        try:
            (raw,) = await self._get_many([self._key(STUDENT_KEY)])
            return StoreRead(value=decode_student_profile(raw) if raw is not None else None)
        except (StorageUnavailableError, SeatDocumentError) as e:
            self._degraded('student', e)
            return StoreRead(value=None, degraded=True)

    async def save_student_profile(self, *, profile: StudentProfile) -> None:
        await self._set_many({self._key(STUDENT_KEY): encode_student_profile(profile)})

    async def clear(self) -> None:
        await self._clear_all()
        Logger.base.warning('🗑️ [SEAT-STORE] All documents cleared')
