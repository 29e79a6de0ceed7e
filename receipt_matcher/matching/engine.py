"""
Matching engine orchestrator.

Evaluates unmatched receipts against the tenant's transactions and returns a
match decision for each. Nothing is persisted: decisions are recomputed from
the current receipts and transactions on every call, so they can never go
stale. Committing a match is done separately by the attachment service.

Flow for one receipt:
  1. Parse the filename (inferring the year of month-day dates)
  2. No date in the filename -> NoAction, no query
  3. Load the tenant's unattached transactions within the candidate window
  4. Score, filter and rank candidates
  5. Decide: AutoMatch, AssignForReview or NoAction
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from receipt_matcher.config import get_settings
from receipt_matcher.models.receipt import Receipt
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename, parse_receipt_filename
from receipt_matcher.matching.selector import select_candidates
from receipt_matcher.matching.decision import MatchDecision, NoAction, decide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceiptEvaluation:
    """A receipt together with its parsed filename and match decision."""

    receipt: Receipt
    parsed: ParsedFilename
    decision: MatchDecision


def find_transactions_in_date_window(
    db: Session,
    tenant_id: str,
    center_date: date,
    days: int,
) -> list[Transaction]:
    """
    Load a tenant's unattached transactions dated within +/- days of center_date.

    Args:
        db: SQLAlchemy session
        tenant_id: Tenant scope
        center_date: Receipt date
        days: Half-width of the window, inclusive

    Returns:
        Transactions ordered by date, then creation time.
    """
    query = select(Transaction).where(
        Transaction.tenant_id == tenant_id,
        Transaction.date >= center_date - timedelta(days=days),
        Transaction.date <= center_date + timedelta(days=days),
    )

    attached = select(Receipt.transaction_id).where(Receipt.transaction_id.is_not(None))
    query = query.where(Transaction.id.not_in(attached))

    query = query.order_by(Transaction.date, Transaction.created_at)
    return list(db.scalars(query))


def evaluate_receipt(
    db: Session,
    receipt: Receipt,
    today: date | None = None,
) -> ReceiptEvaluation:
    """
    Compute the match decision for a single receipt.

    Args:
        db: SQLAlchemy session
        receipt: Receipt to evaluate
        today: Reference date for month-day year inference

    Returns:
        ReceiptEvaluation with the parsed filename and decision.
    """
    settings = get_settings()
    parsed = parse_receipt_filename(receipt.filename, today=today)

    if not parsed.has_date:
        logger.info("Receipt %s has no date in '%s', not scored", receipt.id, receipt.filename)
        return ReceiptEvaluation(receipt=receipt, parsed=parsed, decision=NoAction())

    # Never narrower than the MEDIUM date window
    window = max(settings.candidate_window_days, settings.date_medium_window_days)
    transactions = find_transactions_in_date_window(db, receipt.tenant_id, parsed.date, window)

    candidates = select_candidates(parsed, transactions)
    decision = decide(candidates)

    logger.info(
        "Receipt %s ('%s'): %d transaction(s) in window, %d candidate(s), action=%s",
        receipt.id,
        receipt.filename,
        len(transactions),
        len(candidates),
        decision.action,
    )

    return ReceiptEvaluation(receipt=receipt, parsed=parsed, decision=decision)


def list_unmatched_receipts(db: Session, tenant_id: str) -> list[Receipt]:
    """Receipts in the tenant's inbox, oldest upload first."""
    query = (
        select(Receipt)
        .where(Receipt.tenant_id == tenant_id, Receipt.transaction_id.is_(None))
        .order_by(Receipt.uploaded_at)
    )
    return list(db.scalars(query))


def evaluate_pending_receipts(
    db: Session,
    tenant_id: str,
    today: date | None = None,
) -> list[ReceiptEvaluation]:
    """
    Evaluate every unmatched receipt for a tenant.

    Returns:
        One ReceiptEvaluation per unmatched receipt, in upload order.
    """
    receipts = list_unmatched_receipts(db, tenant_id)

    logger.info("Evaluating %d unmatched receipt(s) for tenant %s", len(receipts), tenant_id)

    return [evaluate_receipt(db, receipt, today=today) for receipt in receipts]
