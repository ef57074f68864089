"""
Seat Store Interface

Durable key-value persistence for the three logical documents: the library
roster, the booking ledger (partitioned per library) and the student profile.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.seating.app.dto.store_read import StoreRead
from src.service.seating.domain.aggregate.library_seat_ledger_aggregate import LibrarySeatLedger
from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile


class ISeatStore(ABC):
    """
    Reads never raise on storage faults: they fall back to the seed roster,
    an empty ledger or no profile, and flag the result as degraded.
    Writes raise StorageUnavailableError.
    """

    @abstractmethod
    async def list_libraries(self) -> StoreRead[List[Library]]:
        """Return the roster in seed order (seeding it on first use)"""
        pass

    @abstractmethod
    async def load_ledger(self, *, library_id: str) -> StoreRead[Optional[LibrarySeatLedger]]:
        """
        Return one library with its ledger partition, or None for an unknown id

        Args:
            library_id: Library id (also the entrance-code payload)
        """
        pass

    @abstractmethod
    async def list_bookings(self) -> StoreRead[List[Booking]]:
        """Return every booking of every library, in no particular order"""
        pass

    @abstractmethod
    async def commit_ledger(self, *, ledger: LibrarySeatLedger) -> None:
        """
        Persist the library record and its ledger partition in one atomic write

        Raises:
            StorageUnavailableError: When the write fails
        """
        pass

    @abstractmethod
    async def get_student_profile(self) -> StoreRead[Optional[StudentProfile]]:
        pass

    @abstractmethod
    async def save_student_profile(self, *, profile: StudentProfile) -> None:
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Drop every stored document; the next read seeds the roster again"""
        pass
