from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from college_erp.auth.rbac import require_role
from college_erp.core.enums import UserRole
from college_erp.db.store import Store, get_store

from .schemas import DashboardStats, HostelSummary
from . import service

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def get_dashboard_stats(
    as_of: Optional[date] = Query(None, description="Reference date for upcoming exams"),
    store: Store = Depends(get_store),
) -> DashboardStats:
    return service.dashboard_stats(store, as_of=as_of)


@router.get(
    "/hostels",
    response_model=List[HostelSummary],
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def get_hostel_summaries(store: Store = Depends(get_store)) -> List[HostelSummary]:
    return service.hostel_summaries(store)
