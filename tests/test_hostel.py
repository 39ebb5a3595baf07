"""Room allocation lifecycle and occupancy invariants."""

import threading
from decimal import Decimal
from uuid import uuid4

import pytest

from college_erp.api.v1.catalog import service as catalog_service
from college_erp.api.v1.hostel import service as hostel_service
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
    UnknownRoom,
    UnknownStudent,
)


def _occupancy(store, room_id, hostel_id):
    room = catalog_service.get_room(store, room_id)
    return room.current_occupants, catalog_service.hostel_room_counts(store, hostel_id)[1]


def test_single_room_fills_after_one_allocation(store, make_room, make_student) -> None:
    room = make_room(capacity=1)
    x, y = make_student("Student X"), make_student("Student Y")

    created = hostel_service.allocate_room(store, x.id, room.id)

    assert created.status == AllocationStatus.ALLOCATED
    assert catalog_service.get_room(store, room.id).current_occupants == 1
    with pytest.raises(RoomFull):
        hostel_service.allocate_room(store, y.id, room.id)
    assert catalog_service.get_room(store, room.id).current_occupants == 1
    assert hostel_service.occupancy_violations(store) == []


def test_allocation_snapshots_rent_and_deposit(store, make_room, make_student) -> None:
    room = make_room(rent="11000")
    student = make_student()

    created = hostel_service.allocate_room(store, student.id, room.id)
    catalog_service.get_room(store, room.id).rent = Decimal("15000")

    allocation = hostel_service.get_allocation(store, created.allocation_id)
    assert allocation.rent == Decimal("11000")
    assert allocation.security_deposit == Decimal("5000")


def test_allocate_validation_order(store, make_room, make_student) -> None:
    room = make_room(capacity=2)
    student = make_student()

    with pytest.raises(UnknownStudent):
        hostel_service.allocate_room(store, uuid4(), uuid4())
    with pytest.raises(UnknownRoom):
        hostel_service.allocate_room(store, student.id, uuid4())

    catalog_service.set_room_active(store, room.id, False)
    with pytest.raises(RoomInactive):
        hostel_service.allocate_room(store, student.id, room.id)
    assert store.allocations == {}


def test_student_holds_one_active_allocation(store, make_room, make_student) -> None:
    first, second = make_room("301", capacity=2), make_room("302", capacity=2)
    student = make_student()

    hostel_service.allocate_room(store, student.id, first.id)
    with pytest.raises(StudentAlreadyAllocated):
        hostel_service.allocate_room(store, student.id, second.id)

    assert catalog_service.get_room(store, second.id).current_occupants == 0


def test_inactive_student_cannot_be_allocated(store, make_room, make_student) -> None:
    room = make_room()
    student = make_student()
    student_service.change_student_status(store, student.id, StudentStatus.SUSPENDED)

    with pytest.raises(InvalidStateError):
        hostel_service.allocate_room(store, student.id, room.id)


def test_allocate_then_vacate_restores_counters(store, hostel, make_room, make_student) -> None:
    room = make_room(capacity=1)
    student = make_student()
    before = _occupancy(store, room.id, hostel.id)

    created = hostel_service.allocate_room(store, student.id, room.id)
    assert _occupancy(store, room.id, hostel.id) == (1, 1)

    result = hostel_service.vacate_room(store, created.allocation_id)

    assert result.status == AllocationStatus.VACATED
    assert _occupancy(store, room.id, hostel.id) == before
    allocation = hostel_service.get_allocation(store, created.allocation_id)
    assert allocation.vacate_date is not None


def test_vacate_twice_fails_without_touching_counters(store, hostel, make_room, make_student) -> None:
    room = make_room(capacity=2)
    a, b = make_student("A Student"), make_student("B Student")
    first = hostel_service.allocate_room(store, a.id, room.id)
    hostel_service.allocate_room(store, b.id, room.id)
    hostel_service.vacate_room(store, first.allocation_id)
    snapshot = _occupancy(store, room.id, hostel.id)

    with pytest.raises(AlreadyVacated):
        hostel_service.vacate_room(store, first.allocation_id)

    assert _occupancy(store, room.id, hostel.id) == snapshot == (1, 0)


def test_vacate_unknown_allocation(store) -> None:
    with pytest.raises(AllocationNotFound):
        hostel_service.vacate_room(store, uuid4())


def test_student_can_move_after_vacating(store, make_room, make_student) -> None:
    old, new = make_room("401"), make_room("402")
    student = make_student()
    created = hostel_service.allocate_room(store, student.id, old.id)
    hostel_service.vacate_room(store, created.allocation_id)

    hostel_service.allocate_room(store, student.id, new.id)

    active = hostel_service.active_allocation_for(store, student.id)
    assert active.room_id == new.id
    assert hostel_service.occupancy_violations(store) == []


def test_suspend_and_reinstate(store, make_room, make_student) -> None:
    room = make_room(capacity=1)
    holder, other = make_student("Holder"), make_student("Other")
    created = hostel_service.allocate_room(store, holder.id, room.id)

    suspended = hostel_service.suspend_allocation(store, created.allocation_id)
    assert suspended.status == AllocationStatus.SUSPENDED
    assert catalog_service.get_room(store, room.id).current_occupants == 0
    with pytest.raises(InvalidTransition):
        hostel_service.suspend_allocation(store, created.allocation_id)

    # The freed bed is taken meanwhile.
    taken = hostel_service.allocate_room(store, other.id, room.id)
    with pytest.raises(RoomFull):
        hostel_service.reinstate_allocation(store, created.allocation_id)

    hostel_service.vacate_room(store, taken.allocation_id)
    reinstated = hostel_service.reinstate_allocation(store, created.allocation_id)
    assert reinstated.status == AllocationStatus.ALLOCATED
    assert catalog_service.get_room(store, room.id).current_occupants == 1
    assert hostel_service.occupancy_violations(store) == []


def test_vacate_suspended_allocation_keeps_counter(store, make_room, make_student) -> None:
    room = make_room(capacity=2)
    student = make_student()
    created = hostel_service.allocate_room(store, student.id, room.id)
    hostel_service.suspend_allocation(store, created.allocation_id)

    hostel_service.vacate_room(store, created.allocation_id)

    assert catalog_service.get_room(store, room.id).current_occupants == 0
    with pytest.raises(AlreadyVacated):
        hostel_service.reinstate_allocation(store, created.allocation_id)


def test_available_rooms_is_restartable(store, hostel, make_room, make_student) -> None:
    full = make_room("501", capacity=1)
    open_room = make_room("502", capacity=2)
    closed = make_room("503", capacity=2)
    catalog_service.set_room_active(store, closed.id, False)
    hostel_service.allocate_room(store, make_student().id, full.id)

    rooms = hostel_service.available_rooms(store, hostel.id)

    assert [r.id for r in rooms] == [open_room.id]
    assert [r.id for r in rooms] == [open_room.id]


def test_race_for_last_bed_has_one_winner(store, make_room, make_student) -> None:
    room = make_room(capacity=1)
    students = [make_student(f"Racer {i}") for i in range(10)]
    results = []
    barrier = threading.Barrier(len(students))

    def attempt(student_id) -> None:
        barrier.wait()
        try:
            hostel_service.allocate_room(store, student_id, room.id)
            results.append("ok")
        except RoomFull:
            results.append("full")

    threads = [threading.Thread(target=attempt, args=(s.id,)) for s in students]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("full") == 9
    assert catalog_service.get_room(store, room.id).current_occupants == 1
    assert hostel_service.occupancy_violations(store) == []


def test_same_student_racing_two_rooms(store, make_room, make_student) -> None:
    rooms = [make_room(f"6{i:02d}", capacity=2) for i in range(6)]
    student = make_student()
    barrier = threading.Barrier(len(rooms))
    won = []

    def attempt(room_id) -> None:
        barrier.wait()
        try:
            hostel_service.allocate_room(store, student.id, room_id)
            won.append(room_id)
        except StudentAlreadyAllocated:
            pass

    threads = [threading.Thread(target=attempt, args=(r.id,)) for r in rooms]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(won) == 1
    assert hostel_service.occupancy_violations(store) == []
