from typing import Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr

from src.service.seating.driving_adapter.http_controller.schema.library_schema import (
    LibraryResponse,
)


class AdminLoginRequest(BaseModel):
    pin: SecretStr = Field(..., min_length=1, max_length=32)

    class Config:
        json_schema_extra = {'example': {'pin': '1111'}}


class LibraryOccupancyResponse(BaseModel):
    library: LibraryResponse
    pending_count: int
    confirmed_count: int


class AdminLoginResponse(BaseModel):
    is_master: bool
    library_id: Optional[str] = None  # None for the master PIN
    libraries: List[LibraryOccupancyResponse]


class AdminReleaseRequest(BaseModel):
    count: int = Field(..., ge=0, description='Checked-in seats to release')

    class Config:
        json_schema_extra = {'example': {'count': 2}}


class AdminReleaseResponse(BaseModel):
    library_id: str
    released_count: int
    available_spots: int


class ReconcileResponse(BaseModel):
    released_seats: int
    released_by_library: Dict[str, int]
    degraded: bool = False
