"""
Amount matching rule.

Compares the absolute amount parsed from the filename against the absolute
value of the transaction amount, so a $25.00 receipt matches both a 25.00
refund and a -25.00 purchase.

Scoring:
  - Exact match: HIGH
  - Within tolerance (default 10% of the receipt amount): MEDIUM
  - Beyond tolerance, or no amount in the filename: NO_MATCH
"""

from decimal import Decimal

from receipt_matcher.matching.confidence import CriterionScore
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename


def score(
    parsed: ParsedFilename,
    transaction: Transaction,
    tolerance_percent: float = 0.10,
) -> dict:
    """
    Score amount match between receipt filename and transaction.

    Args:
        parsed: Parsed receipt filename
        transaction: Candidate transaction (amount may be negative)
        tolerance_percent: Acceptable deviation as a fraction (0.10 = 10%)

    Returns:
        dict with keys: score (CriterionScore), difference (Decimal | None), details (str)
    """
    if parsed.amount is None:
        return {
            "score": CriterionScore.NO_MATCH,
            "difference": None,
            "details": "No amount in filename",
        }

    receipt_amount = abs(parsed.amount)
    transaction_amount = abs(transaction.amount)
    difference = abs(transaction_amount - receipt_amount)

    if difference == Decimal("0"):
        return {
            "score": CriterionScore.HIGH,
            "difference": difference,
            "details": f"Exact amount match: {receipt_amount}",
        }

    # Avoid division by zero
    if receipt_amount == Decimal("0"):
        return {
            "score": CriterionScore.NO_MATCH,
            "difference": difference,
            "details": f"Receipt amount is zero, transaction amount is {transaction_amount}",
        }

    # Percentage difference relative to the receipt amount
    pct_diff = difference / receipt_amount

    if pct_diff <= Decimal(str(tolerance_percent)):
        return {
            "score": CriterionScore.MEDIUM,
            "difference": difference,
            "details": f"Amount within tolerance: |{transaction_amount} - {receipt_amount}| = {difference} ({pct_diff:.2%} diff)",
        }

    return {
        "score": CriterionScore.NO_MATCH,
        "difference": difference,
        "details": f"Amount mismatch: |{transaction_amount} - {receipt_amount}| = {difference} ({pct_diff:.2%} diff, exceeds {tolerance_percent:.0%} tolerance)",
    }
