"""Fees service: scheduling, payment, overdue accrual, receipts, totals.

Paid is terminal for a fee. Corrections need a new fee record; a paid fee is
never rewritten. Every mutation of a fee happens under that fee's lock.
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID

from college_erp.api.v1.students import service as student_service
from college_erp.core.enums import FeeStatus, PaymentMethod
from college_erp.core.exceptions import (
    AlreadyPaid,
    FeeNotFound,
    FeeNotPaid,
    InvalidAmount,
    InvalidPaymentMethod,
    InvalidTransition,
    NotYetDue,
)
from college_erp.core.models import Fee, FeeInstallment, FeePayment
from college_erp.db.store import Store

from .policy import LateFeePolicy
from .schemas import (
    FeeCreate,
    FeeResponse,
    FeeTotals,
    InstallmentResponse,
    PaymentResponse,
    ReceiptResponse,
)

logger = logging.getLogger(__name__)

PAYABLE_STATUSES = (FeeStatus.PENDING, FeeStatus.OVERDUE, FeeStatus.PARTIAL)


def _to_decimal(val) -> Decimal:
    if val is None:
        return Decimal("0")
    return val if isinstance(val, Decimal) else Decimal(str(val))


def _to_payment_method(val: Union[PaymentMethod, str]) -> PaymentMethod:
    if isinstance(val, PaymentMethod):
        return val
    try:
        return PaymentMethod(str(val).strip().lower())
    except ValueError:
        raise InvalidPaymentMethod(f"Unsupported payment method: {val}")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def fee_to_response(fee: Fee) -> FeeResponse:
    payment = fee.payment
    return FeeResponse(
        id=fee.id,
        student_id=fee.student_id,
        type=fee.type,
        amount=fee.amount,
        late_fee=fee.late_fee,
        total_due=fee.total_due,
        balance=fee.balance,
        amount_collected=fee.collected,
        due_date=fee.due_date,
        semester=fee.semester,
        academic_year=fee.academic_year,
        status=fee.status,
        installments=[InstallmentResponse.model_validate(i) for i in fee.installments],
        paid_at=payment.paid_at if payment else None,
        receipt_number=payment.receipt_number if payment else None,
        payment_method=payment.payment_method if payment else None,
        created_at=fee.created_at,
        updated_at=fee.updated_at,
    )


def _payment_to_response(fee: Fee) -> PaymentResponse:
    payment = fee.payment
    return PaymentResponse(
        fee_id=fee.id,
        status=fee.status,
        receipt_number=payment.receipt_number,
        amount=payment.amount_paid,
        payment_method=payment.payment_method,
        paid_at=payment.paid_at,
    )


def get_fee(store: Store, fee_id: UUID) -> Fee:
    fee = store.fees.get(fee_id)
    if fee is None:
        raise FeeNotFound(f"Fee {fee_id} not found")
    return fee


# --- Schedule ---
def schedule_fee(store: Store, payload: FeeCreate) -> FeeResponse:
    """Create a pending fee obligation for a student."""
    amount = _to_decimal(payload.amount)
    cap = store.settings.max_fee_amount
    if amount <= 0:
        raise InvalidAmount("Fee amount must be positive")
    if amount > cap:
        raise InvalidAmount(f"Fee amount exceeds the maximum of {cap}")
    student_service.get_student(store, payload.student_id)

    fee = Fee(
        student_id=payload.student_id,
        type=payload.type,
        amount=amount,
        due_date=payload.due_date,
        semester=payload.semester,
        academic_year=payload.academic_year,
    )
    store.fees[fee.id] = fee
    logger.info(
        "Fee %s scheduled: %s %s for student %s due %s",
        fee.id, fee.type.value, amount, fee.student_id, fee.due_date,
    )
    return fee_to_response(fee)


# --- Payment ---
def _settle(
    store: Store,
    fee: Fee,
    amount: Decimal,
    method: PaymentMethod,
    idempotency_key: Optional[str] = None,
) -> None:
    """Mark the fee paid. Caller holds the fee lock and has validated the status."""
    payment = FeePayment(
        paid_at=_now(),
        receipt_number=store.next_receipt_number(),
        payment_method=method,
        amount_paid=amount,
        idempotency_key=idempotency_key,
    )
    # Status and payment details change together; nothing below can raise.
    fee.payment = payment
    fee.status = FeeStatus.PAID
    fee.updated_at = payment.paid_at


def apply_payment(
    store: Store,
    fee_id: UUID,
    payment_method: Union[PaymentMethod, str],
    idempotency_key: Optional[str] = None,
) -> PaymentResponse:
    """
    Settle the outstanding balance of a fee (principal + late fee - installments).

    Paying an already-paid fee raises AlreadyPaid, unless the call repeats the
    idempotency key of the payment that settled it; then the original receipt
    is returned and nothing is charged again.
    """
    fee = get_fee(store, fee_id)
    method = _to_payment_method(payment_method)

    with store.lock_for("fee", fee_id):
        if fee.status == FeeStatus.PAID:
            if idempotency_key and fee.payment.idempotency_key == idempotency_key:
                logger.info("Fee %s payment replayed for key %s", fee_id, idempotency_key)
                return _payment_to_response(fee)
            logger.warning("Rejected payment for fee %s: already paid", fee_id)
            raise AlreadyPaid(f"Fee {fee_id} is already paid")
        if fee.status not in PAYABLE_STATUSES:
            raise InvalidTransition(f"Fee in status {fee.status.value} cannot be paid")

        amount = fee.balance
        _settle(store, fee, amount, method, idempotency_key)

    logger.info(
        "Fee %s paid: %s via %s, receipt %s",
        fee_id, amount, method.value, fee.payment.receipt_number,
    )
    return _payment_to_response(fee)


def record_partial_payment(
    store: Store,
    fee_id: UUID,
    amount: Union[Decimal, int, str],
    payment_method: Union[PaymentMethod, str],
) -> FeeResponse:
    """
    Record an installment against a fee. The principal is left untouched and
    the balance shrinks. An installment equal to the balance settles the fee.
    """
    fee = get_fee(store, fee_id)
    method = _to_payment_method(payment_method)
    value = _to_decimal(amount)
    if value <= 0:
        raise InvalidAmount("Payment amount must be positive")

    with store.lock_for("fee", fee_id):
        if fee.status == FeeStatus.PAID:
            raise AlreadyPaid(f"Fee {fee_id} is already paid")
        balance = fee.balance
        if value > balance:
            raise InvalidAmount(f"Payment of {value} exceeds the outstanding balance of {balance}")
        if value == balance:
            _settle(store, fee, value, method)
            logger.info("Fee %s settled by installment, receipt %s", fee_id, fee.payment.receipt_number)
            return fee_to_response(fee)

        installment = FeeInstallment(amount=value, payment_method=method, paid_at=_now())
        fee.installments.append(installment)
        if fee.status == FeeStatus.PENDING:
            fee.status = FeeStatus.PARTIAL
        fee.updated_at = installment.paid_at

    logger.info("Fee %s installment of %s recorded, balance %s", fee_id, value, fee.balance)
    return fee_to_response(fee)


# --- Overdue ---
def mark_overdue(
    store: Store,
    fee_id: UUID,
    as_of: Optional[date] = None,
) -> FeeResponse:
    """
    Move an unpaid fee past its due date to overdue and accrue the late fee.
    Paid and already-overdue fees are returned unchanged.
    """
    fee = get_fee(store, fee_id)
    as_of = as_of or date.today()
    policy = LateFeePolicy.from_settings(store.settings)

    with store.lock_for("fee", fee_id):
        if fee.status in (FeeStatus.PAID, FeeStatus.OVERDUE):
            logger.debug("Fee %s left unchanged by overdue check (%s)", fee_id, fee.status.value)
            return fee_to_response(fee)
        if fee.due_date >= as_of:
            raise NotYetDue(f"Fee {fee_id} is not past its due date {fee.due_date}")
        late_fee = policy.late_fee_for(fee.amount)
        fee.late_fee = late_fee
        fee.status = FeeStatus.OVERDUE
        fee.updated_at = _now()

    logger.info("Fee %s overdue as of %s, late fee %s", fee_id, as_of, late_fee)
    return fee_to_response(fee)


def sweep_overdue(store: Store, as_of: Optional[date] = None) -> List[FeeResponse]:
    """Mark every unpaid fee whose due date has passed. Returns the fees that changed."""
    as_of = as_of or date.today()
    candidates = [
        f.id
        for f in list(store.fees.values())
        if f.status in (FeeStatus.PENDING, FeeStatus.PARTIAL) and f.due_date < as_of
    ]
    marked = []
    for fee_id in candidates:
        before = store.fees[fee_id].status
        result = mark_overdue(store, fee_id, as_of=as_of)
        if before != result.status:
            marked.append(result)
    logger.info("Overdue sweep as of %s marked %d fee(s)", as_of, len(marked))
    return marked


# --- Receipt ---
def generate_receipt(store: Store, fee_id: UUID) -> ReceiptResponse:
    fee = get_fee(store, fee_id)
    if fee.status != FeeStatus.PAID:
        raise FeeNotPaid(f"Fee {fee_id} has not been paid")
    student = student_service.get_student(store, fee.student_id)
    payment = fee.payment
    return ReceiptResponse(
        receipt_number=payment.receipt_number,
        fee_id=fee.id,
        student_id=student.id,
        student_name=student.name,
        roll_number=student.roll_number,
        fee_type=fee.type,
        amount=fee.amount,
        late_fee=fee.late_fee,
        amount_paid=fee.collected,
        payment_date=payment.paid_at,
        payment_method=payment.payment_method,
        academic_year=fee.academic_year,
        semester=fee.semester,
    )


# --- Queries ---
def totals_for(store: Store, student_id: UUID) -> FeeTotals:
    """Outstanding balance over unpaid fees and money collected so far."""
    student_service.get_student(store, student_id)
    pending_total = Decimal("0")
    paid_total = Decimal("0")
    for fee in store.fees.values():
        if fee.student_id != student_id:
            continue
        if fee.status in PAYABLE_STATUSES:
            pending_total += fee.balance
        paid_total += fee.collected
    return FeeTotals(student_id=student_id, pending_total=pending_total, paid_total=paid_total)


def list_fees(
    store: Store,
    student_id: Optional[UUID] = None,
    status_filter: Optional[FeeStatus] = None,
) -> List[FeeResponse]:
    fees = [
        f
        for f in store.fees.values()
        if (student_id is None or f.student_id == student_id)
        and (status_filter is None or f.status == status_filter)
    ]
    fees.sort(key=lambda f: (f.due_date, f.created_at))
    return [fee_to_response(f) for f in fees]
