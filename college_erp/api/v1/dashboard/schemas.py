from decimal import Decimal
from typing import Dict
from uuid import UUID

from pydantic import BaseModel

from college_erp.core.enums import AdmissionStatus, HostelType


class DashboardStats(BaseModel):
    """Aggregate snapshot for the admin dashboard. Recomputed on every request."""

    total_students: int
    active_students: int
    total_admissions: int
    pending_admissions: int
    admissions_by_status: Dict[AdmissionStatus, int]
    total_fee_collection: Decimal
    pending_fees: Decimal
    total_rooms: int
    occupied_rooms: int
    hostel_occupancy: float  # percent of rooms with every bed taken
    total_beds: int
    occupied_beds: int
    bed_occupancy: float
    upcoming_exams: int


class HostelSummary(BaseModel):
    hostel_id: UUID
    name: str
    type: HostelType
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    total_beds: int
    occupied_beds: int
    occupancy_rate: float
