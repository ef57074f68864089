from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from src.service.seating.domain.entity.student_profile_entity import StudentProfile


class StudentProfileRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    student_id: str = Field(..., min_length=1, max_length=50, description='ERP id')
    department: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    section: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'name': 'Asha Rawat',
                'student_id': '2201234',
                'department': 'CSE',
                'year': '3',
                'section': 'A',
                'email': 'asha@example.com',
            }
        }

    def to_entity(self) -> StudentProfile:
        return StudentProfile(
            name=self.name.strip(),
            student_id=self.student_id.strip(),
            department=self.department.strip(),
            year=self.year.strip(),
            section=self.section.strip(),
            email=self.email,
            phone=self.phone,
        )


class StudentProfileResponse(BaseModel):
    name: str
    student_id: str
    department: str
    year: str
    section: str
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_entity(cls, profile: StudentProfile) -> 'StudentProfileResponse':
        return cls(
            name=profile.name,
            student_id=profile.student_id,
            department=profile.department,
            year=profile.year,
            section=profile.section,
            email=profile.email,
            phone=profile.phone,
        )
