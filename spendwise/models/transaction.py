"""Transaction model (read-only from this service)."""

import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spendwise.models.base import Base, SoftDeleteMixin, TimestampMixin


class Transaction(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    category_id: Mapped[str | None] = mapped_column(ForeignKey("categories.id"), nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)  # always >= 0, sign is in type
    type: Mapped[str] = mapped_column(String(10), nullable=False)  # income, expense
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    category = relationship("Category", back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount_positive"),
        Index("idx_transactions_owner_date", "owner_id", "date"),
        Index("idx_transactions_owner_type_date", "owner_id", "type", "date"),
    )
