"""
Candidate selection - scores a pool of transactions against one receipt.

The pool is expected to come from the transaction store already restricted
to the receipt's date window (see engine.find_transactions_in_date_window).
Every transaction is scored, candidates with no confidence are dropped and
the rest are ordered best-first:

  1. Confidence (HIGH before MEDIUM)
  2. Smaller absolute date distance
  3. Smaller absolute amount difference
  4. Original pool order (the sort is stable)
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename
from receipt_matcher.matching.confidence import Confidence
from receipt_matcher.matching.scoring import score_pair, ScoreResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchCandidate:
    """A transaction scored against a receipt filename."""

    transaction: Transaction
    score_result: ScoreResult

    @property
    def confidence(self) -> Confidence:
        return self.score_result.confidence


def select_candidates(
    parsed: ParsedFilename,
    transactions: Iterable[Transaction],
) -> list[MatchCandidate]:
    """
    Score and rank candidate transactions for a parsed receipt filename.

    A filename without a date is never scored: the receipt has no candidates
    and must be matched by hand.

    Returns:
        Candidates with MEDIUM or HIGH confidence, best first.
    """
    if not parsed.has_date:
        return []

    candidates = []
    for txn in transactions:
        score_result = score_pair(parsed, txn)
        if score_result.confidence == Confidence.NONE:
            continue
        candidates.append(MatchCandidate(transaction=txn, score_result=score_result))

    candidates.sort(key=_sort_key)

    logger.debug(
        "Selected %d candidate(s) for receipt date=%s payee=%s amount=%s",
        len(candidates),
        parsed.date,
        parsed.payee,
        parsed.amount,
    )

    return candidates


def _sort_key(candidate: MatchCandidate) -> tuple:
    result = candidate.score_result
    days_apart = result.days_apart if result.days_apart is not None else 0
    # No filename amount: all candidates tie on this key
    amount_diff = result.amount_difference if result.amount_difference is not None else Decimal("0")
    return (-result.confidence.rank, days_apart, amount_diff)
