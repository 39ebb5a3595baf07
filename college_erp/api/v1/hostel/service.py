"""
Hostel occupancy: room allocation lifecycle and occupant counters.

A room's current_occupants always equals the number of allocations in status
allocated that reference it, and a student holds at most one such allocation.
Both rules are checked and applied while holding the student lock and then the
room lock, so the capacity check and the increment are a single step.
Hostel occupied-room counts are derived from room state (see catalog service).
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator, List, Optional
from uuid import UUID

from college_erp.api.v1.catalog import service as catalog_service
from college_erp.api.v1.students import service as student_service
from college_erp.core.enums import AllocationStatus, StudentStatus
from college_erp.core.exceptions import (
    AllocationNotFound,
    AlreadyVacated,
    InvalidStateError,
    InvalidTransition,
    RoomFull,
    RoomInactive,
    StudentAlreadyAllocated,
)
from college_erp.core.models import HostelAllocation, Room
from college_erp.db.store import Store

from .schemas import AllocationCreated, AllocationResponse, AllocationStatusResponse

logger = logging.getLogger(__name__)


@contextmanager
def _allocation_locks(store: Store, student_id: UUID, room_id: UUID):
    # Always student first, then room.
    with store.lock_for("student", student_id):
        with store.lock_for("room", room_id):
            yield


def _occupant_count(store: Store, room_id: UUID) -> int:
    return sum(
        1
        for a in store.allocations.values()
        if a.room_id == room_id and a.status == AllocationStatus.ALLOCATED
    )


def _assert_counter_in_sync(store: Store, room: Room) -> None:
    """Refuse to touch a room whose counter has drifted from its allocations."""
    expected = _occupant_count(store, room.id)
    if room.current_occupants != expected:
        logger.error(
            "Room %s occupancy drift: counter=%d allocations=%d",
            room.id, room.current_occupants, expected,
        )
        raise InvalidStateError(f"Occupancy of room {room.room_number} is out of sync")


def active_allocation_for(store: Store, student_id: UUID) -> Optional[HostelAllocation]:
    for allocation in store.allocations.values():
        if allocation.student_id == student_id and allocation.status == AllocationStatus.ALLOCATED:
            return allocation
    return None


def get_allocation(store: Store, allocation_id: UUID) -> HostelAllocation:
    allocation = store.allocations.get(allocation_id)
    if allocation is None:
        raise AllocationNotFound(f"Allocation {allocation_id} not found")
    return allocation


def _status_response(allocation: HostelAllocation) -> AllocationStatusResponse:
    return AllocationStatusResponse(allocation_id=allocation.id, status=allocation.status)


# --- Allocate ---
def allocate_room(
    store: Store,
    student_id: UUID,
    room_id: UUID,
    security_deposit: Optional[Decimal] = None,
    remarks: Optional[str] = None,
) -> AllocationCreated:
    """Give the student a bed in the room. Rent is snapshotted from the room."""
    student = student_service.get_student(store, student_id)
    room = catalog_service.get_room(store, room_id)

    with _allocation_locks(store, student_id, room_id):
        if not room.is_active:
            logger.warning("Rejected allocation of %s to room %s: inactive", student_id, room_id)
            raise RoomInactive(f"Room {room.room_number} is not active")
        if room.current_occupants >= room.capacity:
            logger.warning("Rejected allocation of %s to room %s: full", student_id, room_id)
            raise RoomFull(f"Room {room.room_number} is full")
        existing = active_allocation_for(store, student_id)
        if existing is not None:
            logger.warning("Rejected allocation of %s: already holds %s", student_id, existing.id)
            raise StudentAlreadyAllocated(
                f"Student {student.roll_number} already holds allocation {existing.id}"
            )
        if student.status != StudentStatus.ACTIVE:
            raise InvalidStateError(f"Student {student.roll_number} is {student.status.value}")
        _assert_counter_in_sync(store, room)

        allocation = HostelAllocation(
            student_id=student_id,
            room_id=room_id,
            rent=room.rent,
            security_deposit=(
                security_deposit if security_deposit is not None else store.settings.security_deposit
            ),
            remarks=remarks,
        )
        store.allocations[allocation.id] = allocation
        room.current_occupants += 1

    logger.info(
        "Allocated room %s (%d/%d) to student %s as %s",
        room.room_number, room.current_occupants, room.capacity, student_id, allocation.id,
    )
    return AllocationCreated(
        allocation_id=allocation.id,
        status=allocation.status,
        rent=allocation.rent,
        security_deposit=allocation.security_deposit,
        allocation_date=allocation.allocation_date,
    )


# --- Vacate / suspend / reinstate ---
def vacate_room(store: Store, allocation_id: UUID) -> AllocationStatusResponse:
    allocation = get_allocation(store, allocation_id)
    room = catalog_service.get_room(store, allocation.room_id)

    with _allocation_locks(store, allocation.student_id, allocation.room_id):
        if allocation.status == AllocationStatus.VACATED:
            raise AlreadyVacated(f"Allocation {allocation_id} is already vacated")
        was_occupying = allocation.status == AllocationStatus.ALLOCATED
        if was_occupying:
            _assert_counter_in_sync(store, room)
        allocation.status = AllocationStatus.VACATED
        allocation.vacate_date = datetime.now(timezone.utc)
        if was_occupying:
            room.current_occupants -= 1

    logger.info("Allocation %s vacated; room %s now %d/%d",
                allocation_id, room.room_number, room.current_occupants, room.capacity)
    return _status_response(allocation)


def suspend_allocation(store: Store, allocation_id: UUID) -> AllocationStatusResponse:
    """Suspend an allocation. The bed is released while suspended."""
    allocation = get_allocation(store, allocation_id)
    room = catalog_service.get_room(store, allocation.room_id)

    with _allocation_locks(store, allocation.student_id, allocation.room_id):
        if allocation.status == AllocationStatus.VACATED:
            raise AlreadyVacated(f"Allocation {allocation_id} is already vacated")
        if allocation.status != AllocationStatus.ALLOCATED:
            raise InvalidTransition(
                f"Invalid status transition: {allocation.status.value} -> suspended"
            )
        _assert_counter_in_sync(store, room)
        allocation.status = AllocationStatus.SUSPENDED
        room.current_occupants -= 1

    logger.info("Allocation %s suspended", allocation_id)
    return _status_response(allocation)


def reinstate_allocation(store: Store, allocation_id: UUID) -> AllocationStatusResponse:
    """Return a suspended allocation to allocated, if the bed and the student are still free."""
    allocation = get_allocation(store, allocation_id)
    room = catalog_service.get_room(store, allocation.room_id)

    with _allocation_locks(store, allocation.student_id, allocation.room_id):
        if allocation.status == AllocationStatus.VACATED:
            raise AlreadyVacated(f"Allocation {allocation_id} is already vacated")
        if allocation.status != AllocationStatus.SUSPENDED:
            raise InvalidTransition(
                f"Invalid status transition: {allocation.status.value} -> allocated"
            )
        if not room.is_active:
            raise RoomInactive(f"Room {room.room_number} is not active")
        if room.current_occupants >= room.capacity:
            raise RoomFull(f"Room {room.room_number} is full")
        if active_allocation_for(store, allocation.student_id) is not None:
            raise StudentAlreadyAllocated("Student already holds another active allocation")
        _assert_counter_in_sync(store, room)
        allocation.status = AllocationStatus.ALLOCATED
        room.current_occupants += 1

    logger.info("Allocation %s reinstated", allocation_id)
    return _status_response(allocation)


# --- Queries ---
class AvailableRooms:
    """Active rooms with at least one free bed. Iterating again starts over."""

    def __init__(self, store: Store, hostel_id: Optional[UUID] = None) -> None:
        self._store = store
        self._hostel_id = hostel_id

    def __iter__(self) -> Iterator[Room]:
        for room in list(self._store.rooms.values()):
            if self._hostel_id is not None and room.hostel_id != self._hostel_id:
                continue
            if room.is_active and room.current_occupants < room.capacity:
                yield room


def available_rooms(store: Store, hostel_id: Optional[UUID] = None) -> AvailableRooms:
    if hostel_id is not None:
        catalog_service.get_hostel(store, hostel_id)
    return AvailableRooms(store, hostel_id)


def list_allocations(
    store: Store,
    status_filter: Optional[AllocationStatus] = None,
    room_id: Optional[UUID] = None,
    student_id: Optional[UUID] = None,
) -> List[AllocationResponse]:
    allocations = [
        a
        for a in store.allocations.values()
        if (status_filter is None or a.status == status_filter)
        and (room_id is None or a.room_id == room_id)
        and (student_id is None or a.student_id == student_id)
    ]
    allocations.sort(key=lambda a: a.allocation_date)
    return [AllocationResponse.model_validate(a) for a in allocations]


def occupancy_violations(store: Store) -> List[str]:
    """Describe every broken occupancy rule; empty when the store is consistent."""
    problems = []
    for room in store.rooms.values():
        expected = _occupant_count(store, room.id)
        if room.current_occupants != expected:
            problems.append(
                f"room {room.id}: counter {room.current_occupants} != {expected} allocations"
            )
        if not 0 <= room.current_occupants <= room.capacity:
            problems.append(f"room {room.id}: {room.current_occupants} outside 0..{room.capacity}")
    holders = {}
    for allocation in store.allocations.values():
        if allocation.status != AllocationStatus.ALLOCATED:
            continue
        if allocation.student_id in holders:
            problems.append(f"student {allocation.student_id}: more than one active allocation")
        holders[allocation.student_id] = allocation.id
    return problems
