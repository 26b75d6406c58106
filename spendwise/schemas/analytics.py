"""Analytics schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from spendwise.schemas.transaction import DateRange, TransactionRecord, TransactionTypeFilter


class AnalyticsFilters(BaseModel):
    """Analysis window requested by the caller.

    Accepts both snake_case and camelCase keys (``start_date`` or
    ``startDate``). An empty or missing ``category_ids`` means no category
    restriction.
    """

    start_date: date
    end_date: date
    category_ids: set[str] | None = None
    transaction_type: TransactionTypeFilter = TransactionTypeFilter.ALL

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.start_date, end=self.end_date)


class CategorySpend(BaseModel):
    category_id: str | None
    category_name: str
    total_amount: Decimal
    transaction_count: int
    percentage: float


class MonthlyTrend(BaseModel):
    month: str  # "Jan 2026", "Feb 2026", etc.
    income: Decimal
    expenses: Decimal
    net: Decimal


class SpendingAnomaly(BaseModel):
    date: date
    category_name: str
    amount: Decimal
    percentage_above_average: float


class ForecastProjection(BaseModel):
    month: str
    projected_income: Decimal
    projected_expenses: Decimal
    projected_balance: Decimal
    confidence: float


class AnalyticsData(BaseModel):
    category_spends: list[CategorySpend]
    monthly_trends: list[MonthlyTrend]
    income_total: Decimal
    expenses_total: Decimal
    balance: Decimal
    top_expenses: list[TransactionRecord]
    anomalies: list[SpendingAnomaly]
