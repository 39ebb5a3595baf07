from decimal import Decimal
from typing import AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient

from college_erp.api.v1.catalog import service as catalog_service
from college_erp.api.v1.catalog.schemas import CourseCreate, HostelCreate, RoomCreate
from college_erp.api.v1.students import service as student_service
from college_erp.api.v1.students.schemas import StudentCreate
from college_erp.auth.security import create_access_token
from college_erp.core.config import Settings
from college_erp.core.enums import FeeType, HostelType, RoomType, UserRole
from college_erp.db.seed_demo import seed_demo_data
from college_erp.db.store import Store, get_store
from college_erp.main import app


@pytest.fixture()
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(
        max_fee_amount=Decimal("1000000"),
        late_fee_policy="flat",
        late_fee_flat_amount=Decimal("500"),
        late_fee_percentage=Decimal("5"),
        receipt_prefix="RCP",
        security_deposit=Decimal("5000"),
        bcrypt_rounds=4,
        seed_demo_data=False,
    )


@pytest.fixture()
def store(settings: Settings) -> Store:
    """Empty store; torn down after each test."""
    s = Store(settings)
    yield s
    s.reset()


@pytest.fixture()
def course(store: Store):
    return catalog_service.add_course(
        store,
        CourseCreate(
            name="Electronics",
            code="ECE",
            duration=4,
            fees=Decimal("90000"),
            department="Engineering",
        ),
    )


@pytest.fixture()
def hostel(store: Store):
    return catalog_service.add_hostel(
        store,
        HostelCreate(
            name="North Block",
            type=HostelType.MIXED,
            warden_name="Mrs. Rao",
            warden_phone="555-0100",
        ),
    )


@pytest.fixture()
def make_room(store: Store, hostel):
    def _make(room_number: str = "201", capacity: int = 1, rent: str = "9000"):
        room_type = {1: RoomType.SINGLE, 2: RoomType.DOUBLE, 3: RoomType.TRIPLE}.get(
            capacity, RoomType.DORMITORY
        )
        return catalog_service.add_room(
            store,
            RoomCreate(
                hostel_id=hostel.id,
                room_number=room_number,
                floor=2,
                capacity=capacity,
                type=room_type,
                rent=Decimal(rent),
            ),
        )

    return _make


@pytest.fixture()
def make_student(store: Store, course):
    def _make(name: str = "Asha Verma"):
        return student_service.register_student(
            store, StudentCreate(name=name, course_id=course.id)
        )

    return _make


@pytest.fixture()
def demo_store(settings: Settings) -> Store:
    """Store seeded with the demo college."""
    s = seed_demo_data(Store(settings))
    yield s
    s.reset()


@pytest.fixture()
def demo(demo_store: Store) -> Dict:
    """Handy ids from the demo data."""
    student = next(iter(demo_store.students.values()))
    rooms = {r.room_number: r for r in demo_store.rooms.values()}
    fees = {f.type: f for f in demo_store.fees.values()}
    return {
        "student_id": student.id,
        "room_101": rooms["101"].id,
        "room_102": rooms["102"].id,
        "tuition_fee": fees[FeeType.TUITION].id,
        "hostel_fee": fees[FeeType.HOSTEL].id,
        "allocation_id": next(iter(demo_store.allocations.values())).id,
    }


def _token(role: UserRole) -> str:
    return create_access_token(
        subject={
            "sub": f"{role.value}-1",
            "email": f"{role.value}@college.edu",
            "role": role.value,
            "name": role.value.title(),
        }
    )


@pytest.fixture()
def auth_headers() -> Dict[UserRole, Dict[str, str]]:
    return {role: {"Authorization": f"Bearer {_token(role)}"} for role in UserRole}


@pytest.fixture()
async def client(demo_store: Store) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app, backed by the demo store."""
    app.dependency_overrides[get_store] = lambda: demo_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
