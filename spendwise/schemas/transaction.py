"""Transaction schemas shared by the store and the analytics services."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

UNCATEGORIZED = "Uncategorized"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionTypeFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


class DateRange(BaseModel):
    """Closed date interval: both ends are included."""

    start: date
    end: date

    model_config = {"frozen": True}

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


class TransactionRecord(BaseModel):
    """A transaction as returned by the store. Immutable once fetched."""

    id: str
    owner_id: str
    category_id: str | None = None
    category_name: str = UNCATEGORIZED
    amount: Decimal = Field(ge=0)
    type: TransactionType
    date: date
    created_at: datetime | None = None
    description: str | None = None

    model_config = {"frozen": True}
