from fastapi import APIRouter, Depends, status

from src.platform.exception.exceptions import NotFoundError, StorageUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.reset_local_data_use_case import ResetLocalDataUseCase
from src.service.seating.app.command.save_student_profile_use_case import (
    SaveStudentProfileUseCase,
)
from src.service.seating.app.query.get_student_profile_use_case import GetStudentProfileUseCase
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.driving_adapter.http_controller.schema.student_schema import (
    StudentProfileRequest,
    StudentProfileResponse,
)


router = APIRouter()


async def require_student_profile(
    use_case: GetStudentProfileUseCase = Depends(GetStudentProfileUseCase.depends),
) -> StudentProfile:
    """The onboarded student acting on this device"""
    read = await use_case.execute()
    if read.degraded:
        raise StorageUnavailableError('Student profile unavailable')
    if read.value is None:
        raise NotFoundError('Student profile not set up')
    return read.value


@router.get('')
@Logger.io
async def get_student_profile(
    profile: StudentProfile = Depends(require_student_profile),
) -> StudentProfileResponse:
    return StudentProfileResponse.from_entity(profile)


@router.put('')
@Logger.io
async def save_student_profile(
    request: StudentProfileRequest,
    use_case: SaveStudentProfileUseCase = Depends(SaveStudentProfileUseCase.depends),
) -> StudentProfileResponse:
    profile = await use_case.execute(profile=request.to_entity())
    return StudentProfileResponse.from_entity(profile)


@router.delete('/data', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def reset_local_data(
    use_case: ResetLocalDataUseCase = Depends(ResetLocalDataUseCase.depends),
) -> None:
    await use_case.execute()
