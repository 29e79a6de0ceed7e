"""Application exceptions.

ResourceNotFound subclasses map to HTTP 404 and ConcurrentMatchConflict to
HTTP 409 (see the exception handlers in main.py).
"""

import uuid


class ResourceNotFound(Exception):
    """A requested resource does not exist within the tenant."""

    resource_type = "Resource"

    def __init__(self, key: uuid.UUID, message: str | None = None):
        self.key = key
        super().__init__(message or f"{self.resource_type} with key '{key}' was not found.")


class ReceiptNotFound(ResourceNotFound):
    resource_type = "Receipt"


class TransactionNotFound(ResourceNotFound):
    resource_type = "Transaction"


class ConcurrentMatchConflict(Exception):
    """The receipt or transaction was matched by someone else first.

    Raised instead of overwriting an existing link. Nothing is changed; the
    caller can refresh the inbox and try again.
    """

    def __init__(self, receipt_id: uuid.UUID, transaction_id: uuid.UUID, reason: str):
        self.receipt_id = receipt_id
        self.transaction_id = transaction_id
        self.reason = reason
        super().__init__(
            f"Cannot match receipt {receipt_id} to transaction {transaction_id}: {reason}"
        )
