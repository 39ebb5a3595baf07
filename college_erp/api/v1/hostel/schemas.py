"""Hostel allocation schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from college_erp.core.enums import AllocationStatus


class AllocationCreate(BaseModel):
    student_id: UUID
    room_id: UUID
    security_deposit: Optional[Decimal] = Field(None, ge=0, description="Defaults to the configured deposit")
    remarks: Optional[str] = None


class AllocationCreated(BaseModel):
    allocation_id: UUID
    status: AllocationStatus
    rent: Decimal
    security_deposit: Decimal
    allocation_date: datetime


class AllocationStatusResponse(BaseModel):
    allocation_id: UUID
    status: AllocationStatus


class AllocationResponse(BaseModel):
    id: UUID
    student_id: UUID
    room_id: UUID
    rent: Decimal
    security_deposit: Decimal
    status: AllocationStatus
    allocation_date: datetime
    vacate_date: Optional[datetime] = None
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
