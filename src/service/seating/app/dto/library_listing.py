from typing import List

import attrs

from src.service.seating.domain.entity.library_entity import Library


@attrs.define(frozen=True)
class CampusStats:
    library_count: int
    open_count: int  # Libraries with at least one free seat
    available_seats: int

    @classmethod
    def from_libraries(cls, libraries: List[Library]) -> 'CampusStats':
        return cls(
            library_count=len(libraries),
            open_count=sum(1 for library in libraries if library.has_free_seat),
            available_seats=sum(library.available_spots for library in libraries),
        )


@attrs.define(frozen=True)
class LibraryListing:
    libraries: List[Library]
    stats: CampusStats
    degraded: bool = False


@attrs.define(frozen=True)
class LibraryOccupancy:
    """Admin dashboard row"""

    library: Library
    pending_count: int
    confirmed_count: int
