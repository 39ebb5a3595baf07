"""Fee obligation and its payment records.

The settled state is a single FeePayment value: paid date, receipt number,
method and amount are assigned together and exist only when status is paid.
Partial payments accumulate as installments; the principal never changes.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional

from college_erp.core.enums import FeeStatus, FeeType, PaymentMethod


@dataclass(frozen=True)
class FeeInstallment:
    amount: Decimal
    payment_method: PaymentMethod
    paid_at: datetime


@dataclass(frozen=True)
class FeePayment:
    paid_at: datetime
    receipt_number: str
    payment_method: PaymentMethod
    amount_paid: Decimal  # final settlement, excluding earlier installments
    idempotency_key: Optional[str] = None


@dataclass
class Fee:
    student_id: uuid.UUID
    type: FeeType
    amount: Decimal
    due_date: date
    semester: int
    academic_year: str
    status: FeeStatus = FeeStatus.PENDING
    late_fee: Decimal = Decimal("0")
    installments: List[FeeInstallment] = field(default_factory=list)
    payment: Optional[FeePayment] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def total_due(self) -> Decimal:
        return self.amount + self.late_fee

    @property
    def installments_total(self) -> Decimal:
        return sum((i.amount for i in self.installments), Decimal("0"))

    @property
    def balance(self) -> Decimal:
        if self.status == FeeStatus.PAID:
            return Decimal("0")
        return self.total_due - self.installments_total

    @property
    def collected(self) -> Decimal:
        settled = self.payment.amount_paid if self.payment else Decimal("0")
        return self.installments_total + settled
