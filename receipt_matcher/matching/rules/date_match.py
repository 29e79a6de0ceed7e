"""
Date proximity rule.

Compares the receipt date parsed from the filename against the transaction
date. Card payments usually post within a few days of the purchase, while
invoices may be paid a couple of weeks later.

Scoring (inclusive bounds, defaults from config.py):
  - <= 7 days apart:  HIGH
  - <= 21 days apart: MEDIUM
  - further apart, or no date in the filename: NO_MATCH
"""

from receipt_matcher.matching.confidence import CriterionScore
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename


def score(
    parsed: ParsedFilename,
    transaction: Transaction,
    high_window_days: int = 7,
    medium_window_days: int = 21,
) -> dict:
    """
    Score date proximity between receipt filename and transaction.

    Returns:
        dict with keys: score (CriterionScore), days_apart (int | None), details (str)
    """
    if parsed.date is None:
        return {
            "score": CriterionScore.NO_MATCH,
            "days_apart": None,
            "details": "No date in filename",
        }

    day_diff = abs((transaction.date - parsed.date).days)

    if day_diff <= high_window_days:
        return {
            "score": CriterionScore.HIGH,
            "days_apart": day_diff,
            "details": f"Dates {day_diff} day(s) apart: receipt={parsed.date}, transaction={transaction.date}",
        }

    if day_diff <= medium_window_days:
        return {
            "score": CriterionScore.MEDIUM,
            "days_apart": day_diff,
            "details": f"Dates {day_diff} day(s) apart: receipt={parsed.date}, transaction={transaction.date}",
        }

    return {
        "score": CriterionScore.NO_MATCH,
        "days_apart": day_diff,
        "details": f"Dates too far apart ({day_diff} days): receipt={parsed.date}, transaction={transaction.date}",
    }
