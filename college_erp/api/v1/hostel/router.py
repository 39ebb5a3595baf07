"""Hostel router: room allocation lifecycle and availability."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from college_erp.api.v1.catalog.schemas import RoomResponse
from college_erp.api.v1.catalog.service import room_to_response
from college_erp.auth.rbac import require_role
from college_erp.core.enums import AllocationStatus, UserRole
from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import (
    AllocationCreate,
    AllocationCreated,
    AllocationResponse,
    AllocationStatusResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/hostel", tags=["hostel"])


@router.get(
    "/rooms/available",
    response_model=List[RoomResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_available_rooms(
    hostel_id: Optional[UUID] = Query(None),
    store: Store = Depends(get_store),
) -> List[RoomResponse]:
    try:
        return [room_to_response(r) for r in service.available_rooms(store, hostel_id)]
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Allocations ---
@router.post(
    "/allocations",
    response_model=AllocationCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def allocate_room(
    payload: AllocationCreate,
    store: Store = Depends(get_store),
) -> AllocationCreated:
    try:
        return service.allocate_room(
            store,
            payload.student_id,
            payload.room_id,
            security_deposit=payload.security_deposit,
            remarks=payload.remarks,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "/allocations",
    response_model=List[AllocationResponse],
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def list_allocations(
    allocation_status: Optional[AllocationStatus] = Query(None, alias="status"),
    room_id: Optional[UUID] = Query(None),
    student_id: Optional[UUID] = Query(None),
    store: Store = Depends(get_store),
) -> List[AllocationResponse]:
    return service.list_allocations(
        store, status_filter=allocation_status, room_id=room_id, student_id=student_id
    )


@router.get(
    "/allocations/{allocation_id}",
    response_model=AllocationResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def get_allocation(
    allocation_id: UUID,
    store: Store = Depends(get_store),
) -> AllocationResponse:
    try:
        return AllocationResponse.model_validate(service.get_allocation(store, allocation_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post(
    "/allocations/{allocation_id}/vacate",
    response_model=AllocationStatusResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def vacate_room(
    allocation_id: UUID,
    store: Store = Depends(get_store),
) -> AllocationStatusResponse:
    try:
        return service.vacate_room(store, allocation_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post(
    "/allocations/{allocation_id}/suspend",
    response_model=AllocationStatusResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def suspend_allocation(
    allocation_id: UUID,
    store: Store = Depends(get_store),
) -> AllocationStatusResponse:
    try:
        return service.suspend_allocation(store, allocation_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post(
    "/allocations/{allocation_id}/reinstate",
    response_model=AllocationStatusResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def reinstate_allocation(
    allocation_id: UUID,
    store: Store = Depends(get_store),
) -> AllocationStatusResponse:
    try:
        return service.reinstate_allocation(store, allocation_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
