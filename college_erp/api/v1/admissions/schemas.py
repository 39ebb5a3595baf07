from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from college_erp.core.enums import AdmissionStatus, Gender


class AdmissionCreate(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)
    gender: Gender
    date_of_birth: date
    guardian_name: str = Field(..., min_length=2)
    guardian_phone: str = Field(..., min_length=10)
    course_id: UUID
    previous_education: str = Field(..., min_length=10)
    percentage: Decimal = Field(..., ge=0, le=100)


class AdmissionInterview(BaseModel):
    interview_date: date
    remarks: Optional[str] = None


class AdmissionApprove(BaseModel):
    interview_score: Optional[Decimal] = Field(None, ge=0, le=100)
    year: int = Field(1, ge=1)
    semester: int = Field(1, ge=1)
    remarks: Optional[str] = None


class AdmissionReject(BaseModel):
    remarks: Optional[str] = None


class AdmissionResponse(BaseModel):
    id: UUID
    application_number: str
    name: str
    email: str
    phone: str
    gender: Gender
    date_of_birth: date
    guardian_name: str
    guardian_phone: str
    course_id: UUID
    previous_education: str
    percentage: Decimal
    status: AdmissionStatus
    interview_date: Optional[date] = None
    interview_score: Optional[Decimal] = None
    remarks: Optional[str] = None
    student_id: Optional[UUID] = None
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None
    application_date: datetime

    class Config:
        from_attributes = True
