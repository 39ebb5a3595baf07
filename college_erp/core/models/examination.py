"""Examination: scheduled exam for a course and semester. Read by the dashboard only."""

import uuid
from dataclasses import dataclass, field
from datetime import date

from college_erp.core.enums import ExamStatus, ExamType


@dataclass
class Examination:
    name: str
    type: ExamType
    course_id: uuid.UUID
    semester: int
    academic_year: str
    start_date: date
    end_date: date
    total_marks: int
    passing_marks: int
    status: ExamStatus = ExamStatus.SCHEDULED
    id: uuid.UUID = field(default_factory=uuid.uuid4)
