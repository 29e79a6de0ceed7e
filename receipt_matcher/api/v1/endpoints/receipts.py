"""Receipt endpoints - register receipts, list the inbox, commit matches."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from receipt_matcher.db.session import get_db
from receipt_matcher.models.receipt import Receipt
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.matching.decision import AssignForReview, AutoMatch, MatchDecision
from receipt_matcher.matching.engine import ReceiptEvaluation, evaluate_pending_receipts, evaluate_receipt
from receipt_matcher.services.attachment_service import commit_match, get_receipt
from receipt_matcher.api.v1.schemas.receipts import (
    MatchCommitRequest,
    MatchCommitResponse,
    MatchSuggestion,
    ParsedFilenameResponse,
    ReceiptCreateRequest,
    ReceiptListResponse,
    ReceiptResponse,
    TransactionPreview,
)

router = APIRouter(prefix="/tenant/{tenant_id}/receipts", tags=["Receipts"])


def _transaction_preview(txn: Transaction) -> TransactionPreview:
    return TransactionPreview(
        id=str(txn.id),
        date=txn.date,
        payee=txn.payee,
        amount=txn.amount,
        category=txn.category,
        memo=txn.memo,
    )


def _suggestion(decision: MatchDecision) -> MatchSuggestion:
    """Map a match decision to the UI suggestion. Scores are left out."""
    if isinstance(decision, AutoMatch):
        return MatchSuggestion(
            action=decision.action,
            transaction=_transaction_preview(decision.candidate.transaction),
        )
    if isinstance(decision, AssignForReview):
        return MatchSuggestion(
            action=decision.action,
            candidates=[_transaction_preview(c.transaction) for c in decision.candidates],
        )
    return MatchSuggestion(action=decision.action)


def _receipt_to_response(
    receipt: Receipt,
    evaluation: ReceiptEvaluation | None = None,
) -> ReceiptResponse:
    """Convert a Receipt ORM object (and its evaluation, if any) to a ReceiptResponse."""
    parsed = None
    suggestion = None
    if evaluation is not None:
        parsed = ParsedFilenameResponse(
            date=evaluation.parsed.date,
            amount=evaluation.parsed.amount,
            payee=evaluation.parsed.payee,
            category=evaluation.parsed.category,
            memo=evaluation.parsed.memo,
        )
        suggestion = _suggestion(evaluation.decision)

    return ReceiptResponse(
        id=str(receipt.id),
        filename=receipt.filename,
        uploaded_at=receipt.uploaded_at,
        transaction_id=str(receipt.transaction_id) if receipt.transaction_id else None,
        parsed=parsed,
        suggestion=suggestion,
    )


@router.post("", response_model=ReceiptResponse, status_code=201)
def create_receipt(
    tenant_id: str,
    request: ReceiptCreateRequest,
    db: Session = Depends(get_db),
):
    """
    Register an uploaded receipt by its original filename.

    The file itself is kept in blob storage; only the name is needed for
    matching. The new receipt lands in the inbox.
    """
    receipt = Receipt(tenant_id=tenant_id, filename=request.filename)
    db.add(receipt)
    db.commit()
    db.refresh(receipt)

    return _receipt_to_response(receipt, evaluate_receipt(db, receipt))


@router.get("", response_model=ReceiptListResponse)
def list_receipts(
    tenant_id: str,
    include_matched: bool = Query(False, alias="all", description="Include receipts that are already matched"),
    db: Session = Depends(get_db),
):
    """
    List the tenant's inbox with a match suggestion for each receipt.

    Suggestions are recomputed on every call from the current transactions.
    Use all=true to also list matched receipts (without suggestions).
    """
    responses = [
        _receipt_to_response(evaluation.receipt, evaluation)
        for evaluation in evaluate_pending_receipts(db, tenant_id)
    ]

    if include_matched:
        matched = db.scalars(
            select(Receipt)
            .where(Receipt.tenant_id == tenant_id, Receipt.transaction_id.is_not(None))
            .order_by(Receipt.uploaded_at)
        ).all()
        responses.extend(_receipt_to_response(r) for r in matched)

    return ReceiptListResponse(total=len(responses), receipts=responses)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
def get_receipt_by_id(
    tenant_id: str,
    receipt_id: uuid.UUID,
    db: Session = Depends(get_db),
):
    """Get a single receipt; unmatched receipts include their suggestion."""
    receipt = get_receipt(db, tenant_id, receipt_id)
    if receipt.is_matched:
        return _receipt_to_response(receipt)
    return _receipt_to_response(receipt, evaluate_receipt(db, receipt))


@router.post("/{receipt_id}/match", response_model=MatchCommitResponse)
def match_receipt(
    tenant_id: str,
    receipt_id: uuid.UUID,
    request: MatchCommitRequest,
    db: Session = Depends(get_db),
):
    """
    Attach a receipt to a transaction.

    Works for both an accepted Match suggestion and a pick from the review
    list. Returns 409 if the receipt or the transaction was matched in the
    meantime; refresh the inbox and try again.
    """
    result = commit_match(db, tenant_id, receipt_id, request.transaction_id)

    return MatchCommitResponse(
        message=f"Receipt '{result.receipt.filename}' attached to transaction {result.transaction.id}",
        receipt=_receipt_to_response(result.receipt),
        transaction=_transaction_preview(result.transaction),
    )
