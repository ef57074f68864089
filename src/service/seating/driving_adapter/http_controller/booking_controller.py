from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.seating.app.command.handle_scan_use_case import HandleScanUseCase
from src.service.seating.app.interface.i_clock import IClock
from src.service.seating.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.seating.domain.countdown_projection import (
    format_countdown,
    format_session_remaining,
    seconds_left,
)
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.domain.enum.booking_failure import BookingFailure
from src.service.seating.domain.enum.scan_outcome import ScanOutcome
from src.service.seating.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    PendingBookingResponse,
    ScanRequest,
    ScanResponse,
)
from src.service.seating.driving_adapter.http_controller.student_controller import (
    require_student_profile,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('')
@Logger.io
async def list_bookings(
    student_id: Optional[str] = None,
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    """Booking history, newest first"""
    history = await use_case.list_bookings(student_id=student_id)
    return BookingListResponse(
        bookings=[BookingResponse.from_entity(booking) for booking in history.bookings],
        degraded=history.degraded,
    )


@router.get('/pending')
@Logger.io
@inject
async def get_pending_booking(
    student: StudentProfile = Depends(require_student_profile),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
    clock: IClock = Depends(Provide[Container.clock]),
) -> PendingBookingResponse:
    booking = await use_case.get_pending_booking(student_id=student.student_id)
    if booking is None:
        return PendingBookingResponse()

    remaining = seconds_left(booking.expires_at, clock.now())
    return PendingBookingResponse(
        booking=BookingResponse.from_entity(booking),
        seconds_left=remaining,
        countdown=format_countdown(remaining),
    )


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    student: StudentProfile = Depends(require_student_profile),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('library.id', request.library_id)

        outcome = await use_case.create_booking(library_id=request.library_id, student=student)
        if outcome.failure == BookingFailure.LIBRARY_NOT_FOUND:
            raise NotFoundError(outcome.failure.message)
        if outcome.failure is not None:
            raise ConflictError(outcome.failure.message)
        if outcome.booking is None:
            raise ValueError('Reservation succeeded without a booking')

        span.set_attribute('booking.id', outcome.booking.id)
        return BookingResponse.from_entity(outcome.booking)


@router.post('/scan')
@Logger.io
@inject
async def scan_entrance_code(
    request: ScanRequest,
    student: StudentProfile = Depends(require_student_profile),
    use_case: HandleScanUseCase = Depends(HandleScanUseCase.depends),
    clock: IClock = Depends(Provide[Container.clock]),
) -> ScanResponse:
    result = await use_case.handle_scan(code=request.code, student_id=student.student_id)

    session_remaining = None
    if result.outcome == ScanOutcome.CHECKED_IN and result.booking is not None:
        session_ends_at = result.booking.session_ends_at
        if session_ends_at is not None:
            session_remaining = format_session_remaining(seconds_left(session_ends_at, clock.now()))

    return ScanResponse(
        outcome=result.outcome,
        booking=BookingResponse.from_entity(result.booking) if result.booking else None,
        session_remaining=session_remaining,
    )
