from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.admin_release_seats_use_case import (
    AdminReleaseSeatsUseCase,
)
from src.service.seating.app.command.reconcile_expirations_use_case import (
    ReconcileExpirationsUseCase,
)
from src.service.seating.app.query.authorize_admin_use_case import AuthorizeAdminUseCase
from src.service.seating.app.query.list_library_occupancy_use_case import (
    ListLibraryOccupancyUseCase,
)
from src.service.seating.domain.value_object.admin_scope import AdminScope
from src.service.seating.driving_adapter.http_controller.schema.admin_schema import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminReleaseRequest,
    AdminReleaseResponse,
    LibraryOccupancyResponse,
    ReconcileResponse,
)
from src.service.seating.driving_adapter.http_controller.schema.library_schema import (
    LibraryResponse,
)


router = APIRouter()


async def require_admin_scope(
    x_admin_pin: str = Header(default=''),
    use_case: AuthorizeAdminUseCase = Depends(AuthorizeAdminUseCase.depends),
) -> AdminScope:
    return await use_case.execute(pin=x_admin_pin)


@router.post('/login')
@Logger.io
async def admin_login(
    request: AdminLoginRequest,
    authorize_use_case: AuthorizeAdminUseCase = Depends(AuthorizeAdminUseCase.depends),
    occupancy_use_case: ListLibraryOccupancyUseCase = Depends(ListLibraryOccupancyUseCase.depends),
) -> AdminLoginResponse:
    scope = await authorize_use_case.execute(pin=request.pin.get_secret_value())
    occupancy = await occupancy_use_case.execute(scope=scope)
    return AdminLoginResponse(
        is_master=scope.is_master,
        library_id=scope.library_id,
        libraries=[
            LibraryOccupancyResponse(
                library=LibraryResponse.from_entity(
                    row.library, limited_threshold=settings.LIMITED_SEATS_THRESHOLD
                ),
                pending_count=row.pending_count,
                confirmed_count=row.confirmed_count,
            )
            for row in occupancy
        ],
    )


@router.post('/library/{library_id}/release')
@Logger.io
async def release_seats(
    library_id: str,
    request: AdminReleaseRequest,
    scope: AdminScope = Depends(require_admin_scope),
    use_case: AdminReleaseSeatsUseCase = Depends(AdminReleaseSeatsUseCase.depends),
) -> AdminReleaseResponse:
    outcome = await use_case.execute(scope=scope, library_id=library_id, count=request.count)
    return AdminReleaseResponse(
        library_id=library_id,
        released_count=outcome.released_count,
        available_spots=outcome.library.available_spots,
    )


@router.post('/reconcile', dependencies=[Depends(require_admin_scope)])
@Logger.io
@inject
async def reconcile_expirations(
    use_case: ReconcileExpirationsUseCase = Depends(
        Provide[Container.reconcile_expirations_use_case]
    ),
) -> ReconcileResponse:
    report = await use_case.execute()
    return ReconcileResponse(
        released_seats=report.released_seats,
        released_by_library=report.released_by_library,
        degraded=report.degraded,
    )
