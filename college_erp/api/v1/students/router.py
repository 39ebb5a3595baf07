from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from college_erp.auth.rbac import require_role
from college_erp.core.enums import StudentStatus, UserRole
from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import StudentCreate, StudentResponse, StudentStatusUpdate
from . import service

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def register_student(
    payload: StudentCreate,
    store: Store = Depends(get_store),
) -> StudentResponse:
    try:
        return service.register_student(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "",
    response_model=List[StudentResponse],
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def list_students(
    status_filter: Optional[StudentStatus] = Query(None, alias="status"),
    course_id: Optional[UUID] = Query(None),
    store: Store = Depends(get_store),
) -> List[StudentResponse]:
    return service.list_students(store, status_filter=status_filter, course_id=course_id)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def get_student(
    student_id: UUID,
    store: Store = Depends(get_store),
) -> StudentResponse:
    try:
        return StudentResponse.model_validate(service.get_student(store, student_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.patch(
    "/{student_id}/status",
    response_model=StudentResponse,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def change_student_status(
    student_id: UUID,
    payload: StudentStatusUpdate,
    store: Store = Depends(get_store),
) -> StudentResponse:
    try:
        return service.change_student_status(store, student_id, payload.status)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
