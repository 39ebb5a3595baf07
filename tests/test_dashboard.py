from datetime import date
from decimal import Decimal

from college_erp.api.v1.dashboard import service as dashboard_service
from college_erp.api.v1.fees import service as fee_service
from college_erp.api.v1.hostel import service as hostel_service
from college_erp.core.enums import AdmissionStatus, PaymentMethod


def test_stats_on_demo_college(demo_store) -> None:
    stats = dashboard_service.dashboard_stats(demo_store, as_of=date(2024, 12, 1))

    assert stats.total_students == 1
    assert stats.active_students == 1
    assert stats.total_admissions == 1
    assert stats.pending_admissions == 1
    assert stats.admissions_by_status[AdmissionStatus.PENDING] == 1
    assert stats.total_fee_collection == Decimal("25000")
    assert stats.pending_fees == Decimal("50000")
    assert stats.total_rooms == 2
    assert stats.occupied_rooms == 1
    assert stats.hostel_occupancy == 50.0
    assert stats.total_beds == 3
    assert stats.occupied_beds == 1
    assert stats.upcoming_exams == 1


def test_exams_in_the_past_are_not_upcoming(demo_store) -> None:
    stats = dashboard_service.dashboard_stats(demo_store, as_of=date(2025, 1, 1))
    assert stats.upcoming_exams == 0


def test_stats_follow_ledger_and_occupancy(demo_store, demo) -> None:
    fee_service.apply_payment(demo_store, demo["tuition_fee"], PaymentMethod.CARD)
    hostel_service.vacate_room(demo_store, demo["allocation_id"])

    stats = dashboard_service.dashboard_stats(demo_store)

    assert stats.total_fee_collection == Decimal("75000")
    assert stats.pending_fees == Decimal("0")
    assert stats.occupied_rooms == 0
    assert stats.hostel_occupancy == 0.0


def test_empty_store_has_zero_rates(store) -> None:
    stats = dashboard_service.dashboard_stats(store)
    assert stats.total_rooms == 0
    assert stats.hostel_occupancy == 0.0
    assert stats.bed_occupancy == 0.0


def test_hostel_summaries(demo_store) -> None:
    summaries = {s.name: s for s in dashboard_service.hostel_summaries(demo_store)}

    boys = summaries["Boys Hostel A"]
    assert (boys.total_rooms, boys.occupied_rooms, boys.available_rooms) == (2, 1, 1)
    assert boys.occupancy_rate == 50.0
    assert summaries["Girls Hostel B"].total_rooms == 0
