"""
Seed a store with the demo college: one course, two hostels with rooms,
a student holding a room, fees in several states, an exam and an application.

Everything goes through the services so occupancy counters and fee states
are reached the same way they are at runtime.

Usage:
    python -m college_erp.db.seed_demo
"""

import logging
from datetime import date
from decimal import Decimal

from college_erp.api.v1.admissions import service as admission_service
from college_erp.api.v1.admissions.schemas import AdmissionCreate
from college_erp.api.v1.auth import service as auth_service
from college_erp.api.v1.auth.schemas import UserCreate
from college_erp.api.v1.catalog import service as catalog_service
from college_erp.api.v1.catalog.schemas import (
    CourseCreate,
    ExaminationCreate,
    HostelCreate,
    RoomCreate,
)
from college_erp.api.v1.dashboard import service as dashboard_service
from college_erp.api.v1.fees import service as fee_service
from college_erp.api.v1.fees.schemas import FeeCreate
from college_erp.api.v1.hostel import service as hostel_service
from college_erp.api.v1.students import service as student_service
from college_erp.api.v1.students.schemas import StudentCreate
from college_erp.core.enums import (
    ExamType,
    FeeType,
    Gender,
    HostelType,
    PaymentMethod,
    RoomType,
    UserRole,
)
from college_erp.db.store import Store

logger = logging.getLogger(__name__)

# Demo logins: (email, name, role, password)
DEMO_USERS = (
    ("admin@college.edu", "System Administrator", UserRole.ADMIN, "admin123"),
    ("staff@college.edu", "Staff Member", UserRole.STAFF, "staff123"),
    ("student@college.edu", "John Doe", UserRole.STUDENT, "student123"),
)


def seed_demo_data(store: Store) -> Store:
    for email, name, role, password in DEMO_USERS:
        auth_service.add_user(
            store, UserCreate(email=email, name=name, role=role, password=password)
        )

    course = catalog_service.add_course(
        store,
        CourseCreate(
            name="Computer Science",
            code="CSE",
            duration=4,
            fees=Decimal("100000"),
            department="Engineering",
        ),
    )

    boys = catalog_service.add_hostel(
        store,
        HostelCreate(
            name="Boys Hostel A",
            type=HostelType.BOYS,
            warden_name="Mr. Smith",
            warden_phone="555-0001",
            address="123 Campus Rd, College City",
            facilities=["WiFi", "Laundry", "Gym", "Cafeteria"],
        ),
    )
    catalog_service.add_hostel(
        store,
        HostelCreate(
            name="Girls Hostel B",
            type=HostelType.GIRLS,
            warden_name="Ms. Johnson",
            warden_phone="555-0002",
            address="456 Campus Ave, College City",
            facilities=["WiFi", "Laundry", "Security", "Common Room"],
        ),
    )

    catalog_service.add_room(
        store,
        RoomCreate(
            hostel_id=boys.id,
            room_number="101",
            floor=1,
            capacity=2,
            type=RoomType.DOUBLE,
            rent=Decimal("8000"),
            facilities=["AC", "Attached Bathroom"],
        ),
    )
    single = catalog_service.add_room(
        store,
        RoomCreate(
            hostel_id=boys.id,
            room_number="102",
            floor=1,
            capacity=1,
            type=RoomType.SINGLE,
            rent=Decimal("12000"),
            facilities=["AC", "Attached Bathroom", "Study Table"],
        ),
    )

    student = student_service.register_student(
        store,
        StudentCreate(
            name="John Doe",
            course_id=course.id,
            roll_number="2023CSE001",
            email="john@example.com",
            phone="1234567890",
            admission_date=date(2023, 8, 1),
        ),
    )
    hostel_service.allocate_room(store, student.id, single.id)

    fee_service.schedule_fee(
        store,
        FeeCreate(
            student_id=student.id,
            type=FeeType.TUITION,
            amount=Decimal("50000"),
            due_date=date(2024, 12, 31),
            semester=1,
            academic_year="2023-24",
        ),
    )
    hostel_fee = fee_service.schedule_fee(
        store,
        FeeCreate(
            student_id=student.id,
            type=FeeType.HOSTEL,
            amount=Decimal("25000"),
            due_date=date(2024, 11, 30),
            semester=1,
            academic_year="2023-24",
        ),
    )
    fee_service.apply_payment(store, hostel_fee.id, PaymentMethod.UPI)

    catalog_service.add_examination(
        store,
        ExaminationCreate(
            name="Semester 1 Finals",
            type=ExamType.SEMESTER,
            course_id=course.id,
            semester=1,
            academic_year="2023-24",
            start_date=date(2024, 12, 10),
            end_date=date(2024, 12, 20),
            total_marks=100,
            passing_marks=40,
        ),
    )

    admission_service.submit_admission(
        store,
        AdmissionCreate(
            name="Priya Sharma",
            email="priya@example.com",
            phone="9876543210",
            gender=Gender.FEMALE,
            date_of_birth=date(2006, 3, 14),
            guardian_name="Ravi Sharma",
            guardian_phone="9876500000",
            course_id=course.id,
            previous_education="Higher Secondary, State Board",
            percentage=Decimal("91.4"),
        ),
    )

    logger.info(
        "Demo data seeded: %d user(s), %d course(s), %d hostel(s), %d room(s), %d student(s)",
        len(store.users), len(store.courses), len(store.hostels), len(store.rooms),
        len(store.students),
    )
    return store


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seeded = seed_demo_data(Store())
    print(dashboard_service.dashboard_stats(seeded).model_dump_json(indent=2))
