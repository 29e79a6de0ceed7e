import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from receipt_matcher.db.compat import UUID

from receipt_matcher.db.base import Base


class Receipt(Base):
    """Uploaded receipt or invoice.

    The file body lives in external blob storage; only its metadata is kept
    here. A receipt with no transaction_id is in the inbox (unmatched pool).
    """

    __tablename__ = "receipts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(), primary_key=True, default=uuid.uuid4
    )
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    transaction_id: Mapped[uuid.UUID] = mapped_column(
        UUID(), ForeignKey("transactions.id"), nullable=True, unique=True
    )

    # Relationships
    transaction: Mapped["Transaction"] = relationship(
        "Transaction", back_populates="receipt"
    )

    @property
    def is_matched(self) -> bool:
        return self.transaction_id is not None

    def __repr__(self) -> str:
        return f"<Receipt {self.id}: {self.filename}>"
