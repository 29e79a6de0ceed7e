"""Pydantic schemas for transaction endpoints."""

import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

from receipt_matcher.api.v1.schemas.pagination import PaginationMetadata

# Accepted transaction dates, relative to today
MAX_YEARS_PAST = 50
MAX_YEARS_FUTURE = 5


def _shift_years(day: dt.date, years: int) -> dt.date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year + years, day=28)


class TransactionCreateRequest(BaseModel):
    """Request body for recording a transaction.

    Amounts may be negative (purchases) or positive (refunds) but never zero.
    """
    date: dt.date
    payee: str = Field(max_length=200)
    amount: Decimal = Field(max_digits=15, decimal_places=2)
    category: str | None = Field(default=None, max_length=200)
    memo: str | None = Field(default=None, max_length=1000)

    @field_validator("date")
    @classmethod
    def date_in_range(cls, value: dt.date) -> dt.date:
        today = dt.date.today()
        if not _shift_years(today, -MAX_YEARS_PAST) <= value <= _shift_years(today, MAX_YEARS_FUTURE):
            raise ValueError(
                f"Transaction date must be within {MAX_YEARS_PAST} years in the past "
                f"and {MAX_YEARS_FUTURE} years in the future"
            )
        return value

    @field_validator("payee")
    @classmethod
    def payee_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Payee cannot be empty")
        return value

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Decimal) -> Decimal:
        if value == 0:
            raise ValueError("Transaction amount cannot be zero")
        return value


class TransactionResponse(BaseModel):
    id: str
    date: dt.date
    payee: str
    amount: Decimal
    category: str | None = None
    memo: str | None = None
    receipt_id: str | None = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class TransactionListResponse(BaseModel):
    """One page of transactions with count and page metadata."""
    total: int
    transactions: list[TransactionResponse]
    pagination: PaginationMetadata
