from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from college_erp.auth.rbac import require_role
from college_erp.auth.schemas import CurrentUser
from college_erp.core.enums import AdmissionStatus, UserRole
from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import (
    AdmissionApprove,
    AdmissionCreate,
    AdmissionInterview,
    AdmissionReject,
    AdmissionResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/admissions", tags=["admissions"])


@router.post(
    "",
    response_model=AdmissionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def submit_admission(
    payload: AdmissionCreate,
    store: Store = Depends(get_store),
) -> AdmissionResponse:
    """Submit an admission application."""
    try:
        return service.submit_admission(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "",
    response_model=List[AdmissionResponse],
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def list_admissions(
    status_filter: Optional[AdmissionStatus] = Query(None, alias="status"),
    store: Store = Depends(get_store),
) -> List[AdmissionResponse]:
    return service.list_admissions(store, status_filter=status_filter)


@router.get(
    "/{admission_id}",
    response_model=AdmissionResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def get_admission(
    admission_id: UUID,
    store: Store = Depends(get_store),
) -> AdmissionResponse:
    try:
        return AdmissionResponse.model_validate(service.get_admission(store, admission_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{admission_id}/review", response_model=AdmissionResponse)
async def start_review(
    admission_id: UUID,
    store: Store = Depends(get_store),
    current_user: CurrentUser = Depends(require_role(UserRole.STAFF)),
) -> AdmissionResponse:
    try:
        return service.start_review(store, admission_id, processed_by=current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{admission_id}/interview", response_model=AdmissionResponse)
async def schedule_interview(
    admission_id: UUID,
    payload: AdmissionInterview,
    store: Store = Depends(get_store),
    current_user: CurrentUser = Depends(require_role(UserRole.STAFF)),
) -> AdmissionResponse:
    try:
        return service.schedule_interview(
            store, admission_id, payload, processed_by=current_user.id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{admission_id}/approve", response_model=AdmissionResponse)
async def approve_admission(
    admission_id: UUID,
    payload: AdmissionApprove,
    store: Store = Depends(get_store),
    current_user: CurrentUser = Depends(require_role(UserRole.ADMIN)),
) -> AdmissionResponse:
    """Approve the application; the applicant becomes an active student."""
    try:
        return service.approve_admission(
            store, admission_id, payload, processed_by=current_user.id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{admission_id}/reject", response_model=AdmissionResponse)
async def reject_admission(
    admission_id: UUID,
    payload: AdmissionReject,
    store: Store = Depends(get_store),
    current_user: CurrentUser = Depends(require_role(UserRole.ADMIN)),
) -> AdmissionResponse:
    try:
        return service.reject_admission(
            store, admission_id, payload, processed_by=current_user.id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post("/{admission_id}/confirm", response_model=AdmissionResponse)
async def confirm_admission(
    admission_id: UUID,
    store: Store = Depends(get_store),
    current_user: CurrentUser = Depends(require_role(UserRole.STAFF)),
) -> AdmissionResponse:
    try:
        return service.confirm_admission(store, admission_id, processed_by=current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
