"""
Admission applications. Status moves pending -> under_review -> interview_scheduled
-> approved -> confirmed; rejection is possible from any open state.
Approval admits the applicant: it creates the Student record.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from college_erp.api.v1.catalog import service as catalog_service
from college_erp.api.v1.students import service as student_service
from college_erp.api.v1.students.schemas import StudentCreate
from college_erp.core.enums import AdmissionStatus
from college_erp.core.exceptions import AdmissionNotFound, InvalidTransition
from college_erp.core.models import Admission
from college_erp.db.store import Store

from .schemas import (
    AdmissionApprove,
    AdmissionCreate,
    AdmissionInterview,
    AdmissionReject,
    AdmissionResponse,
)

logger = logging.getLogger(__name__)


OPEN_STATUSES: FrozenSet[AdmissionStatus] = frozenset(
    {
        AdmissionStatus.PENDING,
        AdmissionStatus.UNDER_REVIEW,
        AdmissionStatus.INTERVIEW_SCHEDULED,
    }
)

ADMISSION_TRANSITIONS: Dict[AdmissionStatus, FrozenSet[AdmissionStatus]] = {
    AdmissionStatus.PENDING: frozenset(
        {
            AdmissionStatus.UNDER_REVIEW,
            AdmissionStatus.INTERVIEW_SCHEDULED,
            AdmissionStatus.APPROVED,
            AdmissionStatus.REJECTED,
        }
    ),
    AdmissionStatus.UNDER_REVIEW: frozenset(
        {AdmissionStatus.INTERVIEW_SCHEDULED, AdmissionStatus.APPROVED, AdmissionStatus.REJECTED}
    ),
    AdmissionStatus.INTERVIEW_SCHEDULED: frozenset(
        {AdmissionStatus.APPROVED, AdmissionStatus.REJECTED}
    ),
    AdmissionStatus.APPROVED: frozenset({AdmissionStatus.CONFIRMED}),
    AdmissionStatus.REJECTED: frozenset(),
    AdmissionStatus.CONFIRMED: frozenset(),
}


def get_admission(store: Store, admission_id: UUID) -> Admission:
    admission = store.admissions.get(admission_id)
    if admission is None:
        raise AdmissionNotFound(f"Admission {admission_id} not found")
    return admission


def _transition(
    admission: Admission,
    to_status: AdmissionStatus,
    processed_by: Optional[str],
    remarks: Optional[str] = None,
) -> AdmissionStatus:
    """Move the application to to_status. Caller must hold the admission lock."""
    if to_status not in ADMISSION_TRANSITIONS[admission.status]:
        raise InvalidTransition(
            f"Invalid status transition: {admission.status.value} -> {to_status.value}"
        )
    from_status = admission.status
    admission.status = to_status
    admission.processed_by = processed_by
    admission.processed_at = datetime.now(timezone.utc)
    if remarks is not None:
        admission.remarks = remarks
    logger.info(
        "Admission %s status %s -> %s",
        admission.application_number,
        from_status.value,
        to_status.value,
    )
    return from_status


def submit_admission(store: Store, payload: AdmissionCreate) -> AdmissionResponse:
    catalog_service.get_course(store, payload.course_id)
    admission = Admission(
        application_number=store.next_application_number(datetime.now(timezone.utc).year),
        name=payload.name.strip(),
        email=str(payload.email),
        phone=payload.phone,
        gender=payload.gender,
        date_of_birth=payload.date_of_birth,
        guardian_name=payload.guardian_name.strip(),
        guardian_phone=payload.guardian_phone,
        course_id=payload.course_id,
        previous_education=payload.previous_education.strip(),
        percentage=payload.percentage,
    )
    store.admissions[admission.id] = admission
    logger.info("Admission %s submitted", admission.application_number)
    return AdmissionResponse.model_validate(admission)


def start_review(
    store: Store, admission_id: UUID, processed_by: Optional[str] = None
) -> AdmissionResponse:
    admission = get_admission(store, admission_id)
    with store.lock_for("admission", admission_id):
        _transition(admission, AdmissionStatus.UNDER_REVIEW, processed_by)
    return AdmissionResponse.model_validate(admission)


def schedule_interview(
    store: Store,
    admission_id: UUID,
    payload: AdmissionInterview,
    processed_by: Optional[str] = None,
) -> AdmissionResponse:
    admission = get_admission(store, admission_id)
    with store.lock_for("admission", admission_id):
        _transition(admission, AdmissionStatus.INTERVIEW_SCHEDULED, processed_by, payload.remarks)
        admission.interview_date = payload.interview_date
    return AdmissionResponse.model_validate(admission)


def approve_admission(
    store: Store,
    admission_id: UUID,
    payload: AdmissionApprove,
    processed_by: Optional[str] = None,
) -> AdmissionResponse:
    """Approve the application and create the Student it admits."""
    admission = get_admission(store, admission_id)
    with store.lock_for("admission", admission_id):
        if AdmissionStatus.APPROVED not in ADMISSION_TRANSITIONS[admission.status]:
            raise InvalidTransition(
                f"Invalid status transition: {admission.status.value} -> approved"
            )
        student = student_service.register_student(
            store,
            StudentCreate(
                name=admission.name,
                course_id=admission.course_id,
                year=payload.year,
                semester=payload.semester,
                email=admission.email,
                phone=admission.phone,
            ),
        )
        _transition(admission, AdmissionStatus.APPROVED, processed_by, payload.remarks)
        admission.interview_score = payload.interview_score
        admission.student_id = student.id
    return AdmissionResponse.model_validate(admission)


def reject_admission(
    store: Store,
    admission_id: UUID,
    payload: AdmissionReject,
    processed_by: Optional[str] = None,
) -> AdmissionResponse:
    admission = get_admission(store, admission_id)
    with store.lock_for("admission", admission_id):
        _transition(admission, AdmissionStatus.REJECTED, processed_by, payload.remarks)
    return AdmissionResponse.model_validate(admission)


def confirm_admission(
    store: Store, admission_id: UUID, processed_by: Optional[str] = None
) -> AdmissionResponse:
    admission = get_admission(store, admission_id)
    with store.lock_for("admission", admission_id):
        _transition(admission, AdmissionStatus.CONFIRMED, processed_by)
    return AdmissionResponse.model_validate(admission)


def list_admissions(
    store: Store, status_filter: Optional[AdmissionStatus] = None
) -> List[AdmissionResponse]:
    admissions = [
        a for a in store.admissions.values() if status_filter is None or a.status == status_filter
    ]
    admissions.sort(key=lambda a: a.application_date)
    return [AdmissionResponse.model_validate(a) for a in admissions]


def admission_counts(store: Store) -> Dict[AdmissionStatus, int]:
    counts = {s: 0 for s in AdmissionStatus}
    for admission in store.admissions.values():
        counts[admission.status] += 1
    return counts
