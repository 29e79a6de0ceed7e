"""Pydantic schemas for receipt endpoints.

Match suggestions never carry a numeric score: the action decides which
button the UI shows and candidates are listed best first.
"""

import datetime as dt
import uuid
from decimal import Decimal
from typing import Literal
from pydantic import BaseModel, Field, field_validator


class ReceiptCreateRequest(BaseModel):
    """Request body for registering an uploaded receipt."""
    filename: str = Field(max_length=255)

    @field_validator("filename")
    @classmethod
    def filename_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Filename cannot be empty")
        return value


class ParsedFilenameResponse(BaseModel):
    """Terms recognized in the receipt filename."""
    date: dt.date | None = None
    amount: Decimal | None = None
    payee: str | None = None
    category: str | None = None
    memo: str | None = None


class TransactionPreview(BaseModel):
    """Transaction summary shown next to a match suggestion."""
    id: str
    date: dt.date
    payee: str
    amount: Decimal
    category: str | None = None
    memo: str | None = None


class MatchSuggestion(BaseModel):
    """What the UI should offer for an unmatched receipt.

    - match:  one transaction, shown with a Match button
    - assign: candidates best first, shown behind an Assign button
    - none:   nothing to offer
    """
    action: Literal["match", "assign", "none"]
    transaction: TransactionPreview | None = None
    candidates: list[TransactionPreview] = []


class ReceiptResponse(BaseModel):
    id: str
    filename: str
    uploaded_at: dt.datetime
    transaction_id: str | None = None
    parsed: ParsedFilenameResponse | None = None
    suggestion: MatchSuggestion | None = None


class ReceiptListResponse(BaseModel):
    """List of receipts with count."""
    total: int
    receipts: list[ReceiptResponse]


class MatchCommitRequest(BaseModel):
    """Request body for attaching a receipt to a transaction."""
    transaction_id: uuid.UUID


class MatchCommitResponse(BaseModel):
    message: str
    receipt: ReceiptResponse
    transaction: TransactionPreview
