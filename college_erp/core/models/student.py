"""Student record. Created on admission approval; status lifecycle enforced by the students service."""

import re
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from college_erp.core.enums import StudentStatus

ROLL_NUMBER_PATTERN = re.compile(r"^\d{4}[A-Z]{2,4}\d{3}$")


@dataclass
class Student:
    name: str
    roll_number: str
    course_id: uuid.UUID
    year: int
    semester: int
    email: Optional[str] = None
    phone: Optional[str] = None
    admission_date: date = field(default_factory=date.today)
    status: StudentStatus = StudentStatus.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)
