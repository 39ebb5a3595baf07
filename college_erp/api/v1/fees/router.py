"""Fees router: schedule, pay, partial payment, overdue, receipt, totals."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from college_erp.auth.rbac import require_role
from college_erp.core.enums import FeeStatus, UserRole
from college_erp.core.exceptions import ServiceError
from college_erp.db.store import Store, get_store

from .schemas import (
    FeeCreate,
    FeeResponse,
    FeeTotals,
    OverdueRequest,
    PartialPaymentCreate,
    PaymentCreate,
    PaymentResponse,
    ReceiptResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/fees", tags=["fees"])


# --- Schedule ---
@router.post(
    "",
    response_model=FeeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def schedule_fee(
    payload: FeeCreate,
    store: Store = Depends(get_store),
) -> FeeResponse:
    try:
        return service.schedule_fee(store, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "",
    response_model=List[FeeResponse],
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def list_fees(
    student_id: Optional[UUID] = Query(None),
    fee_status: Optional[FeeStatus] = Query(None, alias="status", description="pending, paid, overdue, partial"),
    store: Store = Depends(get_store),
) -> List[FeeResponse]:
    return service.list_fees(store, student_id=student_id, status_filter=fee_status)


@router.get(
    "/student/{student_id}/totals",
    response_model=FeeTotals,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def get_student_totals(
    student_id: UUID,
    store: Store = Depends(get_store),
) -> FeeTotals:
    try:
        return service.totals_for(store, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.get(
    "/{fee_id}",
    response_model=FeeResponse,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def get_fee(
    fee_id: UUID,
    store: Store = Depends(get_store),
) -> FeeResponse:
    try:
        return service.fee_to_response(service.get_fee(store, fee_id))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Payment ---
@router.post(
    "/{fee_id}/pay",
    response_model=PaymentResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def pay_fee(
    fee_id: UUID,
    payload: PaymentCreate,
    store: Store = Depends(get_store),
) -> PaymentResponse:
    try:
        return service.apply_payment(
            store,
            fee_id,
            payload.payment_method,
            idempotency_key=payload.idempotency_key,
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


@router.post(
    "/{fee_id}/partial",
    response_model=FeeResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def record_partial_payment(
    fee_id: UUID,
    payload: PartialPaymentCreate,
    store: Store = Depends(get_store),
) -> FeeResponse:
    try:
        return service.record_partial_payment(
            store, fee_id, payload.amount, payload.payment_method
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Overdue ---
@router.post(
    "/overdue/sweep",
    response_model=List[FeeResponse],
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def sweep_overdue(
    payload: Optional[OverdueRequest] = None,
    store: Store = Depends(get_store),
) -> List[FeeResponse]:
    return service.sweep_overdue(store, as_of=payload.as_of if payload else None)


@router.post(
    "/{fee_id}/overdue",
    response_model=FeeResponse,
    dependencies=[Depends(require_role(UserRole.STAFF))],
)
async def mark_overdue(
    fee_id: UUID,
    payload: Optional[OverdueRequest] = None,
    store: Store = Depends(get_store),
) -> FeeResponse:
    try:
        return service.mark_overdue(store, fee_id, as_of=payload.as_of if payload else None)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())


# --- Receipt ---
@router.get(
    "/{fee_id}/receipt",
    response_model=ReceiptResponse,
    dependencies=[Depends(require_role(UserRole.STUDENT))],
)
async def get_receipt(
    fee_id: UUID,
    store: Store = Depends(get_store),
) -> ReceiptResponse:
    try:
        return service.generate_receipt(store, fee_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
