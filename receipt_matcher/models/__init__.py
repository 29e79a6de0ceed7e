from receipt_matcher.models.transaction import Transaction
from receipt_matcher.models.receipt import Receipt

__all__ = [
    "Transaction",
    "Receipt",
]
