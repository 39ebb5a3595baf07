"""Dashboard aggregation over the catalog, registry, fee ledger and occupancy state. Read-only."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from college_erp.api.v1.admissions import service as admission_service
from college_erp.api.v1.catalog import service as catalog_service
from college_erp.core.enums import ExamStatus, FeeStatus, StudentStatus
from college_erp.db.store import Store

from .schemas import DashboardStats, HostelSummary


def _percent(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def dashboard_stats(store: Store, as_of: Optional[date] = None) -> DashboardStats:
    as_of = as_of or date.today()

    students = list(store.students.values())
    active_students = sum(1 for s in students if s.status == StudentStatus.ACTIVE)

    by_status = admission_service.admission_counts(store)
    pending_admissions = sum(by_status[s] for s in admission_service.OPEN_STATUSES)

    collected = Decimal("0")
    pending = Decimal("0")
    for fee in list(store.fees.values()):
        collected += fee.collected
        if fee.status != FeeStatus.PAID:
            pending += fee.balance

    rooms = list(store.rooms.values())
    occupied_rooms = sum(1 for r in rooms if r.is_full)
    total_beds = sum(r.capacity for r in rooms)
    occupied_beds = sum(r.current_occupants for r in rooms)

    upcoming_exams = sum(
        1
        for e in store.examinations.values()
        if e.status == ExamStatus.SCHEDULED and e.start_date >= as_of
    )

    return DashboardStats(
        total_students=len(students),
        active_students=active_students,
        total_admissions=sum(by_status.values()),
        pending_admissions=pending_admissions,
        admissions_by_status=by_status,
        total_fee_collection=collected,
        pending_fees=pending,
        total_rooms=len(rooms),
        occupied_rooms=occupied_rooms,
        hostel_occupancy=_percent(occupied_rooms, len(rooms)),
        total_beds=total_beds,
        occupied_beds=occupied_beds,
        bed_occupancy=_percent(occupied_beds, total_beds),
        upcoming_exams=upcoming_exams,
    )


def hostel_summaries(store: Store) -> List[HostelSummary]:
    summaries = []
    for hostel in sorted(store.hostels.values(), key=lambda h: h.name):
        rooms = [r for r in store.rooms.values() if r.hostel_id == hostel.id]
        total_rooms, occupied_rooms = catalog_service.hostel_room_counts(store, hostel.id)
        summaries.append(
            HostelSummary(
                hostel_id=hostel.id,
                name=hostel.name,
                type=hostel.type,
                total_rooms=total_rooms,
                occupied_rooms=occupied_rooms,
                available_rooms=total_rooms - occupied_rooms,
                total_beds=sum(r.capacity for r in rooms),
                occupied_beds=sum(r.current_occupants for r in rooms),
                occupancy_rate=_percent(occupied_rooms, total_rooms),
            )
        )
    return summaries
