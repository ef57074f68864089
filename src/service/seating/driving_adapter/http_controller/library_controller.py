from fastapi import APIRouter, Depends

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.query.list_libraries_use_case import ListLibrariesUseCase
from src.service.seating.driving_adapter.http_controller.schema.library_schema import (
    CampusStatsResponse,
    LibraryListResponse,
    LibraryResponse,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_libraries(
    use_case: ListLibrariesUseCase = Depends(ListLibrariesUseCase.depends),
) -> LibraryListResponse:
    listing = await use_case.execute()
    return LibraryListResponse(
        libraries=[
            LibraryResponse.from_entity(
                library, limited_threshold=settings.LIMITED_SEATS_THRESHOLD
            )
            for library in listing.libraries
        ],
        stats=CampusStatsResponse(
            library_count=listing.stats.library_count,
            open_count=listing.stats.open_count,
            available_seats=listing.stats.available_seats,
        ),
        degraded=listing.degraded,
    )
