"""
Scoring combiner - runs all matching rules for one receipt/transaction pair.

Takes a parsed receipt filename and a transaction, executes the date, amount
and payee rules with their configured thresholds, and reduces the three
criterion scores to an overall confidence. The per-rule breakdown is kept for
logging and tests; it is never shown to users.

Scoring is a pure function of its inputs: the same pair always yields the
same result.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from receipt_matcher.config import get_settings
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename
from receipt_matcher.matching.confidence import Confidence, CriterionScore, aggregate_confidence
from receipt_matcher.matching.rules import amount_match, date_match, payee_match


@dataclass(frozen=True)
class ScoreResult:
    """Result of scoring a receipt/transaction pair."""

    date: CriterionScore
    amount: CriterionScore
    payee: CriterionScore
    confidence: Confidence
    days_apart: int | None = None
    amount_difference: Decimal | None = None
    rule_scores: dict = field(default_factory=dict, compare=False)


def score_pair(parsed: ParsedFilename, transaction: Transaction) -> ScoreResult:
    """
    Score a receipt/transaction pair using all matching rules.

    Thresholds are loaded from application settings (config.py).

    Returns:
        ScoreResult with the three criterion scores, overall confidence and
        per-rule breakdown.
    """
    settings = get_settings()

    rule_scores = {
        "date": date_match.score(
            parsed,
            transaction,
            high_window_days=settings.date_high_window_days,
            medium_window_days=settings.date_medium_window_days,
        ),
        "amount": amount_match.score(
            parsed,
            transaction,
            tolerance_percent=settings.amount_tolerance_percent,
        ),
        "payee": payee_match.score(parsed, transaction),
    }

    date_score = rule_scores["date"]["score"]
    amount_score = rule_scores["amount"]["score"]
    payee_score = rule_scores["payee"]["score"]

    return ScoreResult(
        date=date_score,
        amount=amount_score,
        payee=payee_score,
        confidence=aggregate_confidence(date_score, amount_score, payee_score),
        days_apart=rule_scores["date"]["days_apart"],
        amount_difference=rule_scores["amount"]["difference"],
        rule_scores=rule_scores,
    )
