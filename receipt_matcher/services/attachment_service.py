"""
Attachment service - commits a receipt-to-transaction match.

Called when the user accepts an AutoMatch suggestion or picks a transaction
from the review list. The candidate list the user saw may be stale by now, so
both preconditions are checked again at commit time inside a single
conditional UPDATE:

    UPDATE receipts SET transaction_id = :txn
    WHERE id = :receipt AND tenant_id = :tenant
      AND transaction_id IS NULL
      AND NOT EXISTS (SELECT 1 FROM receipts WHERE transaction_id = :txn)

Zero rows affected means another request got there first, and
ConcurrentMatchConflict is raised with nothing changed. On success the
receipt's category and memo (if present in its filename) overwrite the
transaction's, in the same database transaction. The receipt leaves the inbox
because its transaction_id is no longer null; there is no separate flag.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, aliased

from receipt_matcher.exceptions import (
    ConcurrentMatchConflict,
    ReceiptNotFound,
    TransactionNotFound,
)
from receipt_matcher.models.receipt import Receipt
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import parse_receipt_filename, sanitize_category

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    """Receipt and transaction after a committed match."""

    receipt: Receipt
    transaction: Transaction
    category_applied: bool = False
    memo_applied: bool = False


def get_receipt(db: Session, tenant_id: str, receipt_id: uuid.UUID) -> Receipt:
    receipt = db.scalars(
        select(Receipt).where(Receipt.id == receipt_id, Receipt.tenant_id == tenant_id)
    ).first()
    if receipt is None:
        raise ReceiptNotFound(receipt_id)
    return receipt


def get_transaction(db: Session, tenant_id: str, transaction_id: uuid.UUID) -> Transaction:
    txn = db.scalars(
        select(Transaction).where(
            Transaction.id == transaction_id, Transaction.tenant_id == tenant_id
        )
    ).first()
    if txn is None:
        raise TransactionNotFound(transaction_id)
    return txn


def commit_match(
    db: Session,
    tenant_id: str,
    receipt_id: uuid.UUID,
    transaction_id: uuid.UUID,
    today: date | None = None,
) -> CommitResult:
    """
    Attach a receipt to a transaction.

    Args:
        db: SQLAlchemy session
        tenant_id: Tenant scope for both records
        receipt_id: Receipt to attach
        transaction_id: Target transaction
        today: Reference date for parsing the filename's month-day date

    Returns:
        CommitResult with the refreshed receipt and transaction.

    Raises:
        ReceiptNotFound / TransactionNotFound: id not found in the tenant
        ConcurrentMatchConflict: receipt already matched, or transaction
            already has a receipt
    """
    receipt = get_receipt(db, tenant_id, receipt_id)
    txn = get_transaction(db, tenant_id, transaction_id)

    linked = aliased(Receipt)
    stmt = (
        update(Receipt)
        .where(
            Receipt.id == receipt.id,
            Receipt.tenant_id == tenant_id,
            Receipt.transaction_id.is_(None),
            ~select(linked.id).where(linked.transaction_id == txn.id).exists(),
        )
        .values(transaction_id=txn.id)
        .execution_options(synchronize_session=False)
    )

    try:
        rows = db.execute(stmt).rowcount
    except IntegrityError:
        db.rollback()
        raise _conflict(db, receipt, txn)

    if rows == 0:
        db.rollback()
        raise _conflict(db, receipt, txn)

    result = CommitResult(receipt=receipt, transaction=txn)

    parsed = parse_receipt_filename(receipt.filename, today=today)
    category = sanitize_category(parsed.category)
    if category:
        txn.category = category
        result.category_applied = True
    if parsed.memo:
        txn.memo = parsed.memo
        result.memo_applied = True

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise _conflict(db, receipt, txn)

    db.refresh(receipt)
    db.refresh(txn)

    logger.info(
        "Matched receipt %s ('%s') to transaction %s (category=%s, memo=%s)",
        receipt.id,
        receipt.filename,
        txn.id,
        "applied" if result.category_applied else "unchanged",
        "applied" if result.memo_applied else "unchanged",
    )

    return result


def _conflict(db: Session, receipt: Receipt, txn: Transaction) -> ConcurrentMatchConflict:
    """Work out which precondition failed."""
    db.refresh(receipt)
    if receipt.is_matched:
        reason = f"receipt is already matched to transaction {receipt.transaction_id}"
    else:
        reason = "transaction already has a receipt attached"

    logger.warning(
        "Match conflict for receipt %s / transaction %s: %s",
        receipt.id,
        txn.id,
        reason,
    )
    return ConcurrentMatchConflict(receipt.id, txn.id, reason)
