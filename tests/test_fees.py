"""Fee ledger: scheduling, payment, overdue accrual, partial payments, receipts, totals."""

import threading
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from college_erp.api.v1.fees import service as fee_service
from college_erp.api.v1.fees.policy import LateFeePolicy
from college_erp.api.v1.fees.schemas import FeeCreate
from college_erp.core.enums import FeeStatus, FeeType, LateFeePolicyKind, PaymentMethod
from college_erp.core.exceptions import (
    AlreadyPaid,
    FeeNotFound,
    FeeNotPaid,
    InvalidAmount,
    InvalidPaymentMethod,
    NotYetDue,
    UnknownStudent,
)


def _schedule(store, student_id, amount="50000", due=date(2024, 12, 31), fee_type=FeeType.TUITION):
    return fee_service.schedule_fee(
        store,
        FeeCreate(
            student_id=student_id,
            type=fee_type,
            amount=Decimal(amount),
            due_date=due,
            semester=1,
            academic_year="2024-25",
        ),
    )


def test_schedule_fee_creates_pending(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id)
    assert fee.status == FeeStatus.PENDING
    assert fee.late_fee == Decimal("0")
    assert fee.receipt_number is None
    assert fee.paid_at is None


@pytest.mark.parametrize("amount", ["0", "-10", "1000000.01"])
def test_schedule_fee_rejects_out_of_bounds_amount(store, make_student, amount) -> None:
    student = make_student()
    with pytest.raises(InvalidAmount):
        _schedule(store, student.id, amount=amount)
    assert store.fees == {}


def test_schedule_fee_accepts_amount_at_cap(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="1000000")
    assert fee.amount == Decimal("1000000")


def test_schedule_fee_unknown_student(store) -> None:
    with pytest.raises(UnknownStudent):
        _schedule(store, uuid4())


def test_pay_pending_fee(store, make_student) -> None:
    """Pending 50000 paid by UPI: paid, dated, receipted, counted once."""
    student = make_student()
    fee = _schedule(store, student.id, amount="50000")
    before = fee_service.totals_for(store, student.id)

    result = fee_service.apply_payment(store, fee.id, PaymentMethod.UPI)

    assert result.status == FeeStatus.PAID
    assert result.amount == Decimal("50000")
    assert result.receipt_number
    stored = fee_service.get_fee(store, fee.id)
    assert stored.payment.paid_at is not None
    assert stored.payment.payment_method == PaymentMethod.UPI
    after = fee_service.totals_for(store, student.id)
    assert after.paid_total - before.paid_total == Decimal("50000")
    assert after.pending_total == Decimal("0")


def test_pay_overdue_fee_includes_late_fee(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="1000", due=date(2024, 1, 10))
    overdue = fee_service.mark_overdue(store, fee.id, as_of=date(2024, 2, 1))
    assert overdue.status == FeeStatus.OVERDUE
    assert overdue.late_fee == Decimal("500")

    result = fee_service.apply_payment(store, fee.id, "cash")

    assert result.amount == Decimal("1500")
    assert result.status == FeeStatus.PAID


def test_second_payment_is_rejected(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id)
    first = fee_service.apply_payment(store, fee.id, PaymentMethod.CARD)

    with pytest.raises(AlreadyPaid):
        fee_service.apply_payment(store, fee.id, PaymentMethod.CARD)

    totals = fee_service.totals_for(store, student.id)
    assert totals.paid_total == first.amount
    assert fee_service.get_fee(store, fee.id).payment.receipt_number == first.receipt_number


def test_retry_with_same_idempotency_key_returns_original_receipt(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id)
    first = fee_service.apply_payment(store, fee.id, PaymentMethod.UPI, idempotency_key="abc-1")
    again = fee_service.apply_payment(store, fee.id, PaymentMethod.UPI, idempotency_key="abc-1")

    assert again.receipt_number == first.receipt_number
    assert fee_service.totals_for(store, student.id).paid_total == Decimal("50000")
    with pytest.raises(AlreadyPaid):
        fee_service.apply_payment(store, fee.id, PaymentMethod.UPI, idempotency_key="other")


def test_concurrent_payments_settle_once(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id)
    outcomes = []
    barrier = threading.Barrier(8)

    def pay() -> None:
        barrier.wait()
        try:
            outcomes.append(fee_service.apply_payment(store, fee.id, PaymentMethod.CASH).receipt_number)
        except AlreadyPaid:
            outcomes.append("already-paid")

    threads = [threading.Thread(target=pay) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("already-paid") == 7
    assert fee_service.totals_for(store, student.id).paid_total == Decimal("50000")


def test_payment_errors(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id)
    with pytest.raises(FeeNotFound):
        fee_service.apply_payment(store, uuid4(), PaymentMethod.CASH)
    with pytest.raises(InvalidPaymentMethod):
        fee_service.apply_payment(store, fee.id, "bitcoin")
    assert fee_service.get_fee(store, fee.id).status == FeeStatus.PENDING


def test_receipt_numbers_are_unique(store, make_student) -> None:
    student = make_student()
    receipts = {
        fee_service.apply_payment(store, _schedule(store, student.id, amount="100").id, "cash").receipt_number
        for _ in range(5)
    }
    assert len(receipts) == 5
    assert all(r.startswith("RCP") for r in receipts)


def test_mark_overdue_rules(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="1000", due=date(2024, 3, 1))

    with pytest.raises(NotYetDue):
        fee_service.mark_overdue(store, fee.id, as_of=date(2024, 3, 1))

    first = fee_service.mark_overdue(store, fee.id, as_of=date(2024, 3, 2))
    second = fee_service.mark_overdue(store, fee.id, as_of=date(2024, 4, 2))
    assert first.late_fee == second.late_fee == Decimal("500")


def test_mark_overdue_on_paid_fee_is_noop(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="1000", due=date(2024, 3, 1))
    fee_service.apply_payment(store, fee.id, PaymentMethod.CHECK)

    result = fee_service.mark_overdue(store, fee.id, as_of=date(2025, 1, 1))

    assert result.status == FeeStatus.PAID
    assert result.late_fee == Decimal("0")


def test_percentage_late_fee_policy() -> None:
    policy = LateFeePolicy(kind=LateFeePolicyKind.PERCENTAGE, percentage=Decimal("5"))
    assert policy.late_fee_for(Decimal("1999")) == Decimal("99.95")
    flat = LateFeePolicy(kind=LateFeePolicyKind.FLAT, flat_amount=Decimal("250"))
    assert flat.late_fee_for(Decimal("1999")) == Decimal("250.00")


def test_sweep_overdue_marks_only_past_due(store, make_student) -> None:
    student = make_student()
    late = _schedule(store, student.id, amount="1000", due=date(2024, 1, 1))
    on_time = _schedule(store, student.id, amount="1000", due=date(2024, 6, 1))
    paid = _schedule(store, student.id, amount="1000", due=date(2024, 1, 1))
    fee_service.apply_payment(store, paid.id, "upi")

    marked = fee_service.sweep_overdue(store, as_of=date(2024, 2, 1))

    assert [f.id for f in marked] == [late.id]
    assert fee_service.get_fee(store, on_time.id).status == FeeStatus.PENDING
    assert fee_service.get_fee(store, paid.id).status == FeeStatus.PAID


def test_partial_payments_keep_principal(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="10000")

    partial = fee_service.record_partial_payment(store, fee.id, Decimal("4000"), "cash")
    assert partial.status == FeeStatus.PARTIAL
    assert partial.amount == Decimal("10000")
    assert partial.balance == Decimal("6000")
    assert partial.receipt_number is None

    totals = fee_service.totals_for(store, student.id)
    assert totals.pending_total == Decimal("6000")
    assert totals.paid_total == Decimal("4000")

    with pytest.raises(InvalidAmount):
        fee_service.record_partial_payment(store, fee.id, Decimal("6000.01"), "cash")

    settled = fee_service.apply_payment(store, fee.id, PaymentMethod.UPI)
    assert settled.amount == Decimal("6000")
    assert fee_service.totals_for(store, student.id).paid_total == Decimal("10000")


def test_installment_matching_balance_settles_fee(store, make_student) -> None:
    student = make_student()
    fee = _schedule(store, student.id, amount="3000")
    fee_service.record_partial_payment(store, fee.id, "1000", "cash")
    settled = fee_service.record_partial_payment(store, fee.id, "2000", "card")

    assert settled.status == FeeStatus.PAID
    assert settled.receipt_number is not None
    assert settled.amount_collected == Decimal("3000")


def test_receipt_requires_payment(store, make_student) -> None:
    student = make_student("Kiran Das")
    fee = _schedule(store, student.id, amount="2500", fee_type=FeeType.LIBRARY)
    with pytest.raises(FeeNotPaid):
        fee_service.generate_receipt(store, fee.id)

    payment = fee_service.apply_payment(store, fee.id, PaymentMethod.BANK_TRANSFER)
    receipt = fee_service.generate_receipt(store, fee.id)

    assert receipt.receipt_number == payment.receipt_number
    assert receipt.student_name == "Kiran Das"
    assert receipt.roll_number == student.roll_number
    assert receipt.fee_type == FeeType.LIBRARY
    assert receipt.amount_paid == Decimal("2500")
    assert receipt.payment_method == PaymentMethod.BANK_TRANSFER


def test_totals_sum_pending_and_overdue(store, make_student) -> None:
    student = make_student()
    _schedule(store, student.id, amount="1000", due=date(2030, 1, 1))
    overdue = _schedule(store, student.id, amount="2000", due=date(2024, 1, 1))
    fee_service.mark_overdue(store, overdue.id, as_of=date(2024, 2, 1))

    totals = fee_service.totals_for(store, student.id)

    assert totals.pending_total == Decimal("3500")
    assert totals.paid_total == Decimal("0")
