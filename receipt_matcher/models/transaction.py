import uuid
import datetime as dt
from decimal import Decimal
from sqlalchemy import String, Text, Date, DateTime, Numeric, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from receipt_matcher.db.compat import UUID

from receipt_matcher.db.base import Base


class Transaction(Base):
    """Financial transaction recorded for a tenant."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_tenant_date", "tenant_id", "date"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(), primary_key=True, default=uuid.uuid4
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    payee: Mapped[str] = mapped_column(String(255), nullable=False)
    # Signed: negative for outgoing payments
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)

    # Overwritten when a receipt is matched
    category: Mapped[str] = mapped_column(String(255), nullable=True)
    memo: Mapped[str] = mapped_column(Text, nullable=True)

    # Metadata
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow
    )

    # Relationships
    receipt: Mapped["Receipt"] = relationship(
        "Receipt", back_populates="transaction", uselist=False
    )

    def __repr__(self) -> str:
        return f"<Transaction {self.id}: {self.date} {self.payee} {self.amount}>"
