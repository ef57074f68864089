"""
Seat Document Codec

orjson encoding of the stored documents. Timestamps are ISO-8601 UTC strings;
a document that fails to decode raises SeatDocumentError.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

import orjson

from src.service.seating.domain.entity.booking_entity import Booking
from src.service.seating.domain.entity.library_entity import Library
from src.service.seating.domain.entity.student_profile_entity import StudentProfile
from src.service.seating.domain.enum.booking_status import BookingStatus


class SeatDocumentError(ValueError):
    """A stored document exists but is not a valid seat document"""


_BOOKING_TIMESTAMPS = ('booked_at', 'expires_at', 'checked_in_at', 'session_ends_at', 'checked_out_at')


def _dump_time(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat()


def _load_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _loads(raw: bytes | str, document: str) -> Any:
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise SeatDocumentError(f'{document} is not valid JSON: {e}') from e


# ========== Library ==========


def encode_library(library: Library) -> bytes:
    return orjson.dumps(
        {
            'id': library.id,
            'name': library.name,
            'building': library.building,
            'total_spots': library.total_spots,
            'available_spots': library.available_spots,
            'admin_pin': library.admin_pin,
            'latitude': library.latitude,
            'longitude': library.longitude,
        }
    )


def decode_library(raw: bytes | str) -> Library:
    data = _loads(raw, 'library')
    try:
        return Library(**data)
    except (TypeError, ValueError) as e:
        raise SeatDocumentError(f'Invalid library document: {e}') from e


def encode_roster(library_ids: List[str]) -> bytes:
    return orjson.dumps(library_ids)


def decode_roster(raw: bytes | str) -> List[str]:
    data = _loads(raw, 'roster')
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise SeatDocumentError('Roster must be a list of library ids')
    return data


# ========== Booking ledger partition ==========


def _booking_to_dict(booking: Booking) -> dict[str, Any]:
    data: dict[str, Any] = {
        'id': booking.id,
        'library_id': booking.library_id,
        'library_name': booking.library_name,
        'building': booking.building,
        'student_name': booking.student_name,
        'student_id': booking.student_id,
        'department': booking.department,
        'year': booking.year,
        'section': booking.section,
        'status': booking.status.value,
    }
    for field in _BOOKING_TIMESTAMPS:
        data[field] = _dump_time(getattr(booking, field))
    return data


def _booking_from_dict(data: dict[str, Any]) -> Booking:
    fields = dict(data)
    fields['status'] = BookingStatus(fields['status'])
    for field in _BOOKING_TIMESTAMPS:
        fields[field] = _load_time(fields.get(field))
    return Booking(**fields)


def encode_bookings(bookings: List[Booking]) -> bytes:
    return orjson.dumps([_booking_to_dict(booking) for booking in bookings])


def decode_bookings(raw: bytes | str) -> List[Booking]:
    data = _loads(raw, 'bookings')
    if not isinstance(data, list):
        raise SeatDocumentError('Booking partition must be a list')
    try:
        return [_booking_from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise SeatDocumentError(f'Invalid booking record: {e}') from e


# ========== Student profile ==========


def encode_student_profile(profile: StudentProfile) -> bytes:
    return orjson.dumps(
        {
            'name': profile.name,
            'student_id': profile.student_id,
            'department': profile.department,
            'year': profile.year,
            'section': profile.section,
            'email': profile.email,
            'phone': profile.phone,
        }
    )


def decode_student_profile(raw: bytes | str) -> StudentProfile:
    data = _loads(raw, 'student profile')
    try:
        return StudentProfile(**data)
    except TypeError as e:
        raise SeatDocumentError(f'Invalid student profile: {e}') from e
