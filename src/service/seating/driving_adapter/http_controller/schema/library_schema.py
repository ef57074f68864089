from typing import List, Optional

from pydantic import BaseModel

from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.enum.spot_status import SpotStatus


class LibraryResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 'gehu-central',
                'name': 'Central Library',
                'building': 'Graphic Era Hill University',
                'total_spots': 16,
                'available_spots': 12,
                'spot_status': 'available',
                'latitude': 30.2723733,
                'longitude': 77.9997382,
            }
        },
    }

    id: str
    name: str
    building: str
    total_spots: int
    available_spots: int
    spot_status: SpotStatus
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_entity(cls, library: Library, *, limited_threshold: int) -> 'LibraryResponse':
        # admin_pin never leaves the server
        return cls(
            id=library.id,
            name=library.name,
            building=library.building,
            total_spots=library.total_spots,
            available_spots=library.available_spots,
            spot_status=library.spot_status(limited_threshold=limited_threshold),
            latitude=library.latitude,
            longitude=library.longitude,
        )


class CampusStatsResponse(BaseModel):
    library_count: int
    open_count: int
    available_seats: int


class LibraryListResponse(BaseModel):
    libraries: List[LibraryResponse]
    stats: CampusStatsResponse
    degraded: bool = False
