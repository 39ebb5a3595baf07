"""Fees schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from college_erp.core.enums import FeeStatus, FeeType, PaymentMethod


# --- Schedule ---
class FeeCreate(BaseModel):
    student_id: UUID
    type: FeeType
    amount: Decimal = Field(..., description="Must be positive and within the configured cap")
    due_date: date
    semester: int = Field(..., ge=1, le=12)
    academic_year: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="e.g. 2023-24")


class InstallmentResponse(BaseModel):
    amount: Decimal
    payment_method: PaymentMethod
    paid_at: datetime

    class Config:
        from_attributes = True


class FeeResponse(BaseModel):
    id: UUID
    student_id: UUID
    type: FeeType
    amount: Decimal
    late_fee: Decimal
    total_due: Decimal
    balance: Decimal
    amount_collected: Decimal
    due_date: date
    semester: int
    academic_year: str
    status: FeeStatus
    installments: List[InstallmentResponse] = Field(default_factory=list)
    paid_at: Optional[datetime] = None
    receipt_number: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    created_at: datetime
    updated_at: datetime


# --- Payment ---
class PaymentCreate(BaseModel):
    payment_method: str = Field(..., description="cash, card, bank_transfer, upi, check")
    idempotency_key: Optional[str] = Field(
        None,
        max_length=100,
        description="Client key; retrying with the same key returns the original receipt",
    )


class PartialPaymentCreate(BaseModel):
    amount: Decimal
    payment_method: str = Field(..., description="cash, card, bank_transfer, upi, check")


class PaymentResponse(BaseModel):
    fee_id: UUID
    status: FeeStatus
    receipt_number: str
    amount: Decimal
    payment_method: PaymentMethod
    paid_at: datetime


# --- Overdue ---
class OverdueRequest(BaseModel):
    as_of: Optional[date] = None


# --- Receipt ---
class ReceiptResponse(BaseModel):
    """Read-only view of a settled fee, the data a printed receipt carries."""

    receipt_number: str
    fee_id: UUID
    student_id: UUID
    student_name: str
    roll_number: str
    fee_type: FeeType
    amount: Decimal
    late_fee: Decimal
    amount_paid: Decimal
    payment_date: datetime
    payment_method: PaymentMethod
    academic_year: str
    semester: int


# --- Totals ---
class FeeTotals(BaseModel):
    student_id: UUID
    pending_total: Decimal
    paid_total: Decimal
