"""Catalog router: courses, hostels, rooms, examinations."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from college_erp.auth.rbac import require_role
from college_erp.core.enums import UserRole
from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import (
    CourseCreate,
    CourseResponse,
    ExaminationCreate,
    ExaminationResponse,
    HostelCreate,
    HostelResponse,
    RoomActiveUpdate,
    RoomCreate,
    RoomResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


# --- Courses ---
@router.post(
    "/courses",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def create_course(
    payload: CourseCreate,
    store: Store = Depends(get_store),
) -> CourseResponse:
    try:
        return service.add_course(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "/courses",
    response_model=List[CourseResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_courses(
    active_only: bool = Query(False),
    store: Store = Depends(get_store),
) -> List[CourseResponse]:
    return service.list_courses(store, active_only=active_only)


# --- Hostels ---
@router.post(
    "/hostels",
    response_model=HostelResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def create_hostel(
    payload: HostelCreate,
    store: Store = Depends(get_store),
) -> HostelResponse:
    return service.add_hostel(store, payload)


@router.get(
    "/hostels",
    response_model=List[HostelResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_hostels(store: Store = Depends(get_store)) -> List[HostelResponse]:
    return service.list_hostels(store)


@router.get(
    "/hostels/{hostel_id}",
    response_model=HostelResponse,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def get_hostel(
    hostel_id: UUID,
    store: Store = Depends(get_store),
) -> HostelResponse:
    try:
        return service.get_hostel_details(store, hostel_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Rooms ---
@router.post(
    "/rooms",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def create_room(
    payload: RoomCreate,
    store: Store = Depends(get_store),
) -> RoomResponse:
    try:
        return service.add_room(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "/rooms",
    response_model=List[RoomResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_rooms(
    hostel_id: Optional[UUID] = Query(None),
    store: Store = Depends(get_store),
) -> List[RoomResponse]:
    try:
        return service.list_rooms(store, hostel_id=hostel_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.patch(
    "/rooms/{room_id}/active",
    response_model=RoomResponse,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def set_room_active(
    room_id: UUID,
    payload: RoomActiveUpdate,
    store: Store = Depends(get_store),
) -> RoomResponse:
    try:
        return service.set_room_active(store, room_id, payload.is_active)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Examinations ---
@router.post(
    "/examinations",
    response_model=ExaminationResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def create_examination(
    payload: ExaminationCreate,
    store: Store = Depends(get_store),
) -> ExaminationResponse:
    try:
        return service.add_examination(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "/examinations",
    response_model=List[ExaminationResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_examinations(
    course_id: Optional[UUID] = Query(None),
    store: Store = Depends(get_store),
) -> List[ExaminationResponse]:
    return service.list_examinations(store, course_id=course_id)
