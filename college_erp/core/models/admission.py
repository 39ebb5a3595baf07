"""Admission application. Approval creates the Student."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from college_erp.core.enums import AdmissionStatus, Gender


@dataclass
class Admission:
    application_number: str
    name: str
    email: str
    phone: str
    gender: Gender
    date_of_birth: date
    guardian_name: str
    guardian_phone: str
    course_id: uuid.UUID
    previous_education: str
    percentage: Decimal
    status: AdmissionStatus = AdmissionStatus.PENDING
    interview_date: Optional[date] = None
    interview_score: Optional[Decimal] = None
    remarks: Optional[str] = None
    student_id: Optional[uuid.UUID] = None  # set on approval
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None
    application_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)
