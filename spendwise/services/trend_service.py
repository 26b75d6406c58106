"""Monthly income/expense trend series."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from spendwise.core.exceptions import ValidationError
from spendwise.schemas.analytics import MonthlyTrend
from spendwise.schemas.transaction import DateRange, TransactionType
from spendwise.services.transaction_store import TransactionStore
from spendwise.utils.dates import max_months_back, month_label, trailing_month_windows


class TrendService:
    def __init__(self, store: TransactionStore, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    async def build_monthly_trends(self, owner_id: str, months_back: int) -> list[MonthlyTrend]:
        """Income, expenses and net for the trailing ``months_back`` calendar months.

        The series always ends with the current (partial) month and is
        ordered oldest first. It ignores any analysis filter: every
        transaction of the owner inside each month counts.
        """
        if months_back < 1:
            raise ValidationError("months must be at least 1")

        today = self.today()
        limit = max_months_back(today)
        if months_back > limit:
            raise ValidationError(f"months must be at most {limit}")

        windows = trailing_month_windows(today, months_back)
        span = DateRange(start=windows[0].start, end=windows[-1].end)

        transactions = await self.store.query_transactions(owner_id, span)

        buckets = {(w.start.year, w.start.month): [Decimal("0"), Decimal("0")] for w in windows}
        for txn in transactions:
            bucket = buckets.get((txn.date.year, txn.date.month))
            if bucket is None:
                continue
            if txn.type == TransactionType.INCOME:
                bucket[0] += txn.amount
            else:
                bucket[1] += txn.amount

        trends = []
        for window in windows:
            income, expenses = buckets[(window.start.year, window.start.month)]
            trends.append(
                MonthlyTrend(
                    month=month_label(window.start),
                    income=income,
                    expenses=expenses,
                    net=income - expenses,
                )
            )
        return trends
