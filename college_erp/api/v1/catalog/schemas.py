"""Catalog schemas: courses, hostels, rooms, examinations."""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from college_erp.core.enums import ExamStatus, ExamType, HostelType, RoomType


# --- Course ---
class CourseCreate(BaseModel):
    name: str = Field(..., min_length=2)
    code: str = Field(..., pattern=r"^[A-Z]{2,4}$", description="2-4 uppercase letters")
    duration: int = Field(..., ge=1, le=10, description="Duration in years")
    fees: Decimal = Field(..., ge=0)
    department: str
    description: Optional[str] = None


class CourseResponse(BaseModel):
    id: UUID
    name: str
    code: str
    duration: int
    fees: Decimal
    department: str
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


# --- Hostel ---
class HostelCreate(BaseModel):
    name: str = Field(..., min_length=2)
    type: HostelType
    warden_name: str
    warden_phone: str
    address: Optional[str] = None
    facilities: List[str] = Field(default_factory=list)


class HostelResponse(BaseModel):
    """Hostel with room counts derived from the current room state."""

    id: UUID
    name: str
    type: HostelType
    warden_name: str
    warden_phone: str
    address: Optional[str] = None
    facilities: List[str]
    is_active: bool
    total_rooms: int
    occupied_rooms: int
    occupancy_rate: float


# --- Room ---
class RoomCreate(BaseModel):
    hostel_id: UUID
    room_number: str = Field(..., min_length=1, max_length=20)
    floor: int = Field(..., ge=0)
    capacity: int = Field(..., ge=1)
    type: RoomType
    rent: Decimal = Field(..., ge=0)
    facilities: List[str] = Field(default_factory=list)


class RoomActiveUpdate(BaseModel):
    is_active: bool


class RoomResponse(BaseModel):
    id: UUID
    hostel_id: UUID
    room_number: str
    floor: int
    capacity: int
    current_occupants: int
    available_beds: int
    type: RoomType
    rent: Decimal
    facilities: List[str]
    is_active: bool

    class Config:
        from_attributes = True


# --- Examination ---
class ExaminationCreate(BaseModel):
    name: str
    type: ExamType
    course_id: UUID
    semester: int = Field(..., ge=1, le=12)
    academic_year: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="e.g. 2023-24")
    start_date: date
    end_date: date
    total_marks: int = Field(..., gt=0)
    passing_marks: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_dates_and_marks(self) -> "ExaminationCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.passing_marks > self.total_marks:
            raise ValueError("passing_marks cannot exceed total_marks")
        return self


class ExaminationResponse(BaseModel):
    id: UUID
    name: str
    type: ExamType
    course_id: UUID
    semester: int
    academic_year: str
    start_date: date
    end_date: date
    total_marks: int
    passing_marks: int
    status: ExamStatus

    class Config:
        from_attributes = True
