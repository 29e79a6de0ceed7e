"""Transaction endpoints - record and list a tenant's transactions."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from receipt_matcher.db.session import get_db
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import sanitize_category
from receipt_matcher.services.attachment_service import get_transaction
from receipt_matcher.api.v1.schemas.transactions import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionListResponse,
)
from receipt_matcher.api.v1.schemas.pagination import ITEMS_PER_PAGE, calculate_pagination

router = APIRouter(prefix="/tenant/{tenant_id}/transactions", tags=["Transactions"])


def _transaction_to_response(txn: Transaction) -> TransactionResponse:
    """Convert a Transaction ORM object to a TransactionResponse schema."""
    return TransactionResponse(
        id=str(txn.id),
        date=txn.date,
        payee=txn.payee,
        amount=txn.amount,
        category=txn.category,
        memo=txn.memo,
        receipt_id=str(txn.receipt.id) if txn.receipt else None,
        created_at=txn.created_at,
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    tenant_id: str,
    request: TransactionCreateRequest,
    db: Session = Depends(get_db),
):
    """Record a transaction for the tenant. The category is sanitized before it is stored."""
    txn = Transaction(
        tenant_id=tenant_id,
        date=request.date,
        payee=request.payee,
        amount=request.amount,
        category=sanitize_category(request.category) or None,
        memo=request.memo,
    )
    db.add(txn)
    db.commit()
    db.refresh(txn)

    return _transaction_to_response(txn)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    tenant_id: str,
    from_date: date | None = Query(None, description="Earliest transaction date (inclusive)"),
    to_date: date | None = Query(None, description="Latest transaction date (inclusive)"),
    page: int = Query(1, ge=1, description="Page number, 1-based"),
    db: Session = Depends(get_db),
):
    """List the tenant's transactions newest first, optionally restricted to a date range.

    Results come 50 per page; total is the count across all pages.
    """
    if from_date and to_date and from_date > to_date:
        raise HTTPException(status_code=400, detail="from_date must not be after to_date")

    query = (
        select(Transaction)
        .options(selectinload(Transaction.receipt))
        .where(Transaction.tenant_id == tenant_id)
    )
    if from_date:
        query = query.where(Transaction.date >= from_date)
    if to_date:
        query = query.where(Transaction.date <= to_date)

    total_count = db.scalar(select(func.count()).select_from(query.subquery()))

    transactions = db.scalars(
        query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .offset((page - 1) * ITEMS_PER_PAGE)
        .limit(ITEMS_PER_PAGE)
    ).all()

    return TransactionListResponse(
        total=total_count,
        transactions=[_transaction_to_response(t) for t in transactions],
        pagination=calculate_pagination(page, total_count),
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction_by_id(
    tenant_id: str,
    transaction_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    """Get a single transaction by ID."""
    return _transaction_to_response(get_transaction(db, tenant_id, transaction_id))
