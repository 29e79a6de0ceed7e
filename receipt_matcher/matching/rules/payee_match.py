"""
Payee matching rule.

The payee term from the filename is a single word typed by the user
("Costco", "shell"), while bank payees tend to be longer
("COSTCO WHSE #0421", "Shell Gas Station"). A case-insensitive substring
test covers this. There is no MEDIUM tier for payees.

Scoring:
  - Filename payee found in transaction payee: HIGH
  - Not found, or no payee in the filename: NO_MATCH
"""

from receipt_matcher.matching.confidence import CriterionScore
from receipt_matcher.models.transaction import Transaction
from receipt_matcher.parsers.receipt_filename import ParsedFilename


def score(parsed: ParsedFilename, transaction: Transaction) -> dict:
    """
    Score payee match between receipt filename and transaction.

    Returns:
        dict with keys: score (CriterionScore), details (str)
    """
    if not parsed.payee:
        return {
            "score": CriterionScore.NO_MATCH,
            "details": "No payee in filename",
        }

    if not transaction.payee:
        return {
            "score": CriterionScore.NO_MATCH,
            "details": "Missing payee on transaction",
        }

    if parsed.payee.casefold() in transaction.payee.casefold():
        return {
            "score": CriterionScore.HIGH,
            "details": f"Payee match: '{parsed.payee}' in '{transaction.payee}'",
        }

    return {
        "score": CriterionScore.NO_MATCH,
        "details": f"Payee mismatch: '{parsed.payee}' not in '{transaction.payee}'",
    }
