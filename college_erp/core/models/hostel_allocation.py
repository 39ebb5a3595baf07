"""Hostel allocation: binds one student to one room. Lifecycle allocated -> suspended -> allocated|vacated."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from college_erp.core.enums import AllocationStatus


@dataclass
class HostelAllocation:
    student_id: uuid.UUID
    room_id: uuid.UUID
    rent: Decimal  # snapshot of room rent at allocation time
    security_deposit: Decimal
    status: AllocationStatus = AllocationStatus.ALLOCATED
    allocation_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    vacate_date: Optional[datetime] = None
    remarks: Optional[str] = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
