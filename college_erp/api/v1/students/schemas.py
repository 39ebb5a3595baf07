from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from college_erp.core.enums import StudentStatus


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=2)
    course_id: UUID
    year: int = Field(1, ge=1, le=10)
    semester: int = Field(1, ge=1, le=12)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=10)
    roll_number: Optional[str] = Field(
        None,
        description="YYYY + 2-4 uppercase letters + 3 digits, e.g. 2023CSE001. Generated when omitted.",
    )
    admission_date: Optional[date] = None


class StudentStatusUpdate(BaseModel):
    status: StudentStatus


class StudentResponse(BaseModel):
    id: UUID
    name: str
    roll_number: str
    course_id: UUID
    year: int
    semester: int
    email: Optional[str] = None
    phone: Optional[str] = None
    admission_date: date
    status: StudentStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
