from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.enum.booking_status import BookingStatus
from src.service.seating.domain.enum.scan_outcome import ScanOutcome


class BookingCreateRequest(BaseModel):
    library_id: str = Field(..., min_length=1)

    class Config:
        json_schema_extra = {'example': {'library_id': 'gehu-central'}}


class ScanRequest(BaseModel):
    code: str = Field(..., min_length=1, description='Entrance code payload (the library id)')

    class Config:
        json_schema_extra = {'example': {'code': 'gehu-central'}}


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'library_id': 'gehu-central',
                'library_name': 'Central Library',
                'building': 'Graphic Era Hill University',
                'student_name': 'Asha Rawat',
                'student_id': '2201234',
                'department': 'CSE',
                'year': '3',
                'section': 'A',
                'status': 'pending',
                'booked_at': '2025-01-10T10:30:00Z',
                'expires_at': '2025-01-10T10:36:00Z',
            }
        },
    }

    id: str
    library_id: str
    library_name: str
    building: str
    student_name: str
    student_id: str
    department: str
    year: str
    section: str
    status: BookingStatus
    booked_at: datetime
    expires_at: datetime
    checked_in_at: Optional[datetime] = None
    session_ends_at: Optional[datetime] = None
    checked_out_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            library_id=booking.library_id,
            library_name=booking.library_name,
            building=booking.building,
            student_name=booking.student_name,
            student_id=booking.student_id,
            department=booking.department,
            year=booking.year,
            section=booking.section,
            status=booking.status,
            booked_at=booking.booked_at,
            expires_at=booking.expires_at,
            checked_in_at=booking.checked_in_at,
            session_ends_at=booking.session_ends_at,
            checked_out_at=booking.checked_out_at,
        )


class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    degraded: bool = False


class PendingBookingResponse(BaseModel):
    booking: Optional[BookingResponse] = None
    seconds_left: int = 0
    countdown: str = '0:00'  # m:ss


class ScanResponse(BaseModel):
    outcome: ScanOutcome
    booking: Optional[BookingResponse] = None
    session_remaining: Optional[str] = None  # e.g. '4h 0m' after check-in
