"""
Student registry. Roll numbers are unique; status moves forward only,
except that suspension can be lifted.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from college_erp.api.v1.catalog import service as catalog_service
from college_erp.core.enums import StudentStatus
from college_erp.core.exceptions import (
    ConstraintViolationError,
    DuplicateRollNumber,
    InvalidTransition,
    UnknownStudent,
)
from college_erp.core.models import ROLL_NUMBER_PATTERN, Student
from college_erp.db.store import Store

from .schemas import StudentCreate, StudentResponse

logger = logging.getLogger(__name__)

# Roll numbers end in exactly three digits.
MAX_ROLL_SEQUENCE = 999


STATUS_TRANSITIONS: Dict[StudentStatus, FrozenSet[StudentStatus]] = {
    StudentStatus.ACTIVE: frozenset(
        {StudentStatus.SUSPENDED, StudentStatus.INACTIVE, StudentStatus.GRADUATED}
    ),
    StudentStatus.SUSPENDED: frozenset({StudentStatus.ACTIVE, StudentStatus.INACTIVE}),
    StudentStatus.INACTIVE: frozenset(),
    StudentStatus.GRADUATED: frozenset(),
}


def get_student(store: Store, student_id: UUID) -> Student:
    student = store.students.get(student_id)
    if student is None:
        raise UnknownStudent(f"Student {student_id} not found")
    return student


def generate_roll_number(store: Store, year: int, course_code: str) -> str:
    """Next free roll number for the intake year and course, e.g. 2023CSE001."""
    taken = {s.roll_number for s in store.students.values()}
    while True:
        seq = store.next_roll_sequence(year, course_code)
        if seq > MAX_ROLL_SEQUENCE:
            raise ConstraintViolationError(
                f"Roll number sequence exhausted for {year:04d}{course_code}"
            )
        candidate = f"{year:04d}{course_code}{seq:03d}"
        if candidate not in taken:
            return candidate


def register_student(
    store: Store,
    payload: StudentCreate,
) -> StudentResponse:
    course = catalog_service.get_course(store, payload.course_id)
    admission_date = payload.admission_date or date.today()

    with store.lock_for("registry", "roll_numbers"):
        if payload.roll_number:
            roll_number = payload.roll_number.strip()
            if not ROLL_NUMBER_PATTERN.match(roll_number):
                raise ConstraintViolationError(
                    "Roll number must be a 4-digit year, 2-4 uppercase letters and 3 digits"
                )
            if any(s.roll_number == roll_number for s in store.students.values()):
                raise DuplicateRollNumber(f"Roll number {roll_number} is already assigned")
        else:
            roll_number = generate_roll_number(store, admission_date.year, course.code)

        student = Student(
            name=payload.name.strip(),
            roll_number=roll_number,
            course_id=course.id,
            year=payload.year,
            semester=payload.semester,
            email=str(payload.email) if payload.email else None,
            phone=payload.phone,
            admission_date=admission_date,
        )
        store.students[student.id] = student

    logger.info("Student %s registered with roll number %s", student.id, roll_number)
    return StudentResponse.model_validate(student)


def change_student_status(
    store: Store,
    student_id: UUID,
    new_status: StudentStatus,
) -> StudentResponse:
    student = get_student(store, student_id)
    with store.lock_for("student", student_id):
        if new_status == student.status:
            return StudentResponse.model_validate(student)
        if new_status not in STATUS_TRANSITIONS[student.status]:
            raise InvalidTransition(
                f"Invalid status transition: {student.status.value} -> {new_status.value}"
            )
        from_status = student.status
        student.status = new_status
        student.updated_at = datetime.now(timezone.utc)
    logger.info("Student %s status %s -> %s", student_id, from_status.value, new_status.value)
    return StudentResponse.model_validate(student)


def list_students(
    store: Store,
    status_filter: Optional[StudentStatus] = None,
    course_id: Optional[UUID] = None,
) -> List[StudentResponse]:
    students = [
        s
        for s in store.students.values()
        if (status_filter is None or s.status == status_filter)
        and (course_id is None or s.course_id == course_id)
    ]
    students.sort(key=lambda s: s.roll_number)
    return [StudentResponse.model_validate(s) for s in students]
