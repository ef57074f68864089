from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define(frozen=True)
class StudentProfile:
    name: str
    student_id: str  # Externally issued ERP id
    department: str
    year: str
    section: str
    email: Optional[str] = None
    phone: Optional[str] = None

    REQUIRED_FIELDS = ('name', 'student_id', 'department', 'year', 'section')

    def validate_complete(self) -> None:
        """Onboarding requires every identity field that gets copied onto bookings"""
        missing = [name for name in self.REQUIRED_FIELDS if not getattr(self, name).strip()]
        if missing:
            raise DomainError(f'Student profile is missing: {", ".join(missing)}')
