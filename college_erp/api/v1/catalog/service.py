"""Catalog service: courses, hostels, rooms, examinations. Reference data; only admins change it."""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from college_erp.core.exceptions import (
    ConstraintViolationError,
    DuplicateRoomNumber,
    UnknownCourse,
    UnknownHostel,
    UnknownRoom,
)
from college_erp.core.models import Course, Examination, Hostel, Room
from college_erp.db.store import Store

from .schemas import (
    CourseCreate,
    CourseResponse,
    ExaminationCreate,
    ExaminationResponse,
    HostelCreate,
    HostelResponse,
    RoomCreate,
    RoomResponse,
)

logger = logging.getLogger(__name__)


# --- Course ---
def add_course(store: Store, payload: CourseCreate) -> CourseResponse:
    if any(c.code == payload.code for c in store.courses.values()):
        raise ConstraintViolationError(f"Course code {payload.code} already exists")
    course = Course(
        name=payload.name.strip(),
        code=payload.code,
        duration=payload.duration,
        fees=payload.fees,
        department=payload.department.strip(),
        description=payload.description,
    )
    store.courses[course.id] = course
    logger.info("Course %s (%s) added", course.code, course.id)
    return CourseResponse.model_validate(course)


def get_course(store: Store, course_id: UUID) -> Course:
    course = store.courses.get(course_id)
    if course is None:
        raise UnknownCourse(f"Course {course_id} not found")
    return course


def list_courses(store: Store, active_only: bool = False) -> List[CourseResponse]:
    courses = sorted(store.courses.values(), key=lambda c: c.code)
    return [CourseResponse.model_validate(c) for c in courses if c.is_active or not active_only]


# --- Hostel ---
def hostel_room_counts(store: Store, hostel_id: UUID) -> Tuple[int, int]:
    """Return (total_rooms, occupied_rooms); a room is occupied when every bed is taken."""
    rooms = [r for r in store.rooms.values() if r.hostel_id == hostel_id]
    return len(rooms), sum(1 for r in rooms if r.is_full)


def _hostel_to_response(store: Store, hostel: Hostel) -> HostelResponse:
    total, occupied = hostel_room_counts(store, hostel.id)
    return HostelResponse(
        id=hostel.id,
        name=hostel.name,
        type=hostel.type,
        warden_name=hostel.warden_name,
        warden_phone=hostel.warden_phone,
        address=hostel.address,
        facilities=list(hostel.facilities),
        is_active=hostel.is_active,
        total_rooms=total,
        occupied_rooms=occupied,
        occupancy_rate=round(occupied / total * 100, 2) if total else 0.0,
    )


def add_hostel(store: Store, payload: HostelCreate) -> HostelResponse:
    hostel = Hostel(
        name=payload.name.strip(),
        type=payload.type,
        warden_name=payload.warden_name,
        warden_phone=payload.warden_phone,
        address=payload.address,
        facilities=list(payload.facilities),
    )
    store.hostels[hostel.id] = hostel
    logger.info("Hostel %s (%s) added", hostel.name, hostel.id)
    return _hostel_to_response(store, hostel)


def get_hostel(store: Store, hostel_id: UUID) -> Hostel:
    hostel = store.hostels.get(hostel_id)
    if hostel is None:
        raise UnknownHostel(f"Hostel {hostel_id} not found")
    return hostel


def get_hostel_details(store: Store, hostel_id: UUID) -> HostelResponse:
    return _hostel_to_response(store, get_hostel(store, hostel_id))


def list_hostels(store: Store) -> List[HostelResponse]:
    hostels = sorted(store.hostels.values(), key=lambda h: h.name)
    return [_hostel_to_response(store, h) for h in hostels]


# --- Room ---
def room_to_response(room: Room) -> RoomResponse:
    return RoomResponse(
        id=room.id,
        hostel_id=room.hostel_id,
        room_number=room.room_number,
        floor=room.floor,
        capacity=room.capacity,
        current_occupants=room.current_occupants,
        available_beds=room.available_beds,
        type=room.type,
        rent=room.rent,
        facilities=list(room.facilities),
        is_active=room.is_active,
    )


def add_room(store: Store, payload: RoomCreate) -> RoomResponse:
    get_hostel(store, payload.hostel_id)
    room_number = payload.room_number.strip()
    with store.lock_for("hostel", payload.hostel_id):
        duplicate = any(
            r.hostel_id == payload.hostel_id and r.room_number == room_number
            for r in store.rooms.values()
        )
        if duplicate:
            raise DuplicateRoomNumber(f"Room {room_number} already exists in this hostel")
        room = Room(
            hostel_id=payload.hostel_id,
            room_number=room_number,
            floor=payload.floor,
            capacity=payload.capacity,
            type=payload.type,
            rent=payload.rent,
            facilities=list(payload.facilities),
        )
        store.rooms[room.id] = room
    logger.info("Room %s added to hostel %s", room_number, payload.hostel_id)
    return room_to_response(room)


def get_room(store: Store, room_id: UUID) -> Room:
    room = store.rooms.get(room_id)
    if room is None:
        raise UnknownRoom(f"Room {room_id} not found")
    return room


def list_rooms(store: Store, hostel_id: Optional[UUID] = None) -> List[RoomResponse]:
    if hostel_id is not None:
        get_hostel(store, hostel_id)
    rooms = [r for r in store.rooms.values() if hostel_id is None or r.hostel_id == hostel_id]
    rooms.sort(key=lambda r: (str(r.hostel_id), r.floor, r.room_number))
    return [room_to_response(r) for r in rooms]


def set_room_active(store: Store, room_id: UUID, is_active: bool) -> RoomResponse:
    """Deactivating a room blocks new allocations; current occupants stay until vacated."""
    room = get_room(store, room_id)
    with store.lock_for("room", room_id):
        room.is_active = is_active
    logger.info("Room %s marked %s", room_id, "active" if is_active else "inactive")
    return room_to_response(room)


# --- Examination ---
def add_examination(store: Store, payload: ExaminationCreate) -> ExaminationResponse:
    get_course(store, payload.course_id)
    exam = Examination(
        name=payload.name.strip(),
        type=payload.type,
        course_id=payload.course_id,
        semester=payload.semester,
        academic_year=payload.academic_year,
        start_date=payload.start_date,
        end_date=payload.end_date,
        total_marks=payload.total_marks,
        passing_marks=payload.passing_marks,
    )
    store.examinations[exam.id] = exam
    logger.info("Examination %s scheduled from %s", exam.name, exam.start_date)
    return ExaminationResponse.model_validate(exam)


def list_examinations(store: Store, course_id: Optional[UUID] = None) -> List[ExaminationResponse]:
    exams = [e for e in store.examinations.values() if course_id is None or e.course_id == course_id]
    exams.sort(key=lambda e: e.start_date)
    return [ExaminationResponse.model_validate(e) for e in exams]
