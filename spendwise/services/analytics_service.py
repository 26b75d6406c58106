"""Analytics service: category breakdowns, totals, anomalies, trends and forecasts."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

import structlog

from spendwise.config import settings
from spendwise.core.exceptions import AuthenticationError
from spendwise.schemas.analytics import (
    AnalyticsData,
    AnalyticsFilters,
    CategorySpend,
    ForecastProjection,
    MonthlyTrend,
    SpendingAnomaly,
)
from spendwise.schemas.transaction import TransactionRecord, TransactionType
from spendwise.services.aggregation import aggregate_category_spends
from spendwise.services.anomaly_detection import detect_spending_anomalies
from spendwise.services.filtering import apply_filters, validate_filters
from spendwise.services.forecast_service import ForecastService
from spendwise.services.transaction_store import TransactionStore
from spendwise.services.trend_service import TrendService
from spendwise.utils.concurrency import gather_all

logger = structlog.get_logger()


def _require_owner(owner_id: str | None) -> str:
    if not owner_id:
        raise AuthenticationError("Owner id is required")
    return owner_id


def _total(transactions: list[TransactionRecord]) -> Decimal:
    return sum((t.amount for t in transactions), Decimal("0"))


class AnalyticsService:
    def __init__(self, store: TransactionStore, today: Callable[[], date] = date.today):
        self.store = store
        self.trends = TrendService(store, today=today)
        self.forecasts = ForecastService(store, today=today)

    async def get_analytics(self, owner_id: str, filters: AnalyticsFilters) -> AnalyticsData:
        """Compute the full analytics payload for one analysis window.

        The five reads below are independent and run concurrently. If any of
        them fails the others are cancelled and the error propagates; no
        partial result is ever returned.
        """
        owner_id = _require_owner(owner_id)
        validate_filters(filters)

        try:
            category_spends, (income_total, expenses_total), top_expenses, anomalies, trends = await gather_all(
                self._category_spends(owner_id, filters),
                self._income_and_expenses(owner_id, filters),
                self._top_expenses(owner_id, filters, settings.analytics_top_expenses_limit),
                self._spending_anomalies(owner_id, filters),
                self.trends.build_monthly_trends(owner_id, settings.analytics_trend_months),
            )
        except Exception as e:
            logger.warning("analytics_fanout_failed", owner_id=owner_id, error=str(e))
            raise

        logger.info(
            "analytics_computed",
            owner_id=owner_id,
            start=filters.start_date.isoformat(),
            end=filters.end_date.isoformat(),
            categories=len(category_spends),
            anomalies=len(anomalies),
        )
        return AnalyticsData(
            category_spends=category_spends,
            monthly_trends=trends,
            income_total=income_total,
            expenses_total=expenses_total,
            balance=income_total - expenses_total,
            top_expenses=top_expenses,
            anomalies=anomalies,
        )

    async def get_category_spends(self, owner_id: str, filters: AnalyticsFilters) -> list[CategorySpend]:
        owner_id = _require_owner(owner_id)
        validate_filters(filters)
        return await self._category_spends(owner_id, filters)

    async def get_filtered_transactions(
        self,
        owner_id: str,
        filters: AnalyticsFilters,
    ) -> list[TransactionRecord]:
        """Transactions matching every part of the filter, type subset included."""
        owner_id = _require_owner(owner_id)
        validate_filters(filters)

        transactions = await self.store.query_transactions(
            owner_id,
            filters.date_range,
            category_ids=filters.category_ids,
        )
        return apply_filters(transactions, filters)

    async def get_monthly_trends(self, owner_id: str, months: int = 12) -> list[MonthlyTrend]:
        return await self.trends.build_monthly_trends(_require_owner(owner_id), months)

    async def get_forecast_projections(self, owner_id: str, months: int = 3) -> list[ForecastProjection]:
        return await self.forecasts.project(_require_owner(owner_id), months)

    async def _category_spends(self, owner_id: str, filters: AnalyticsFilters) -> list[CategorySpend]:
        expenses = await self.store.query_transactions(
            owner_id,
            filters.date_range,
            type=TransactionType.EXPENSE,
            category_ids=filters.category_ids,
        )
        return aggregate_category_spends(expenses, filters)

    async def _income_and_expenses(
        self,
        owner_id: str,
        filters: AnalyticsFilters,
    ) -> tuple[Decimal, Decimal]:
        # Two independent sums over the date window, no category restriction
        income, expenses = await gather_all(
            self.store.query_transactions(owner_id, filters.date_range, type=TransactionType.INCOME),
            self.store.query_transactions(owner_id, filters.date_range, type=TransactionType.EXPENSE),
        )
        return _total(income), _total(expenses)

    async def _top_expenses(
        self,
        owner_id: str,
        filters: AnalyticsFilters,
        limit: int,
    ) -> list[TransactionRecord]:
        expenses = await self.store.query_transactions(
            owner_id,
            filters.date_range,
            type=TransactionType.EXPENSE,
            category_ids=filters.category_ids,
        )
        # sorted() is stable: equal amounts keep store order
        return sorted(expenses, key=lambda t: t.amount, reverse=True)[:limit]

    async def _spending_anomalies(
        self,
        owner_id: str,
        filters: AnalyticsFilters,
    ) -> list[SpendingAnomaly]:
        expenses = await self.store.query_transactions(
            owner_id,
            filters.date_range,
            type=TransactionType.EXPENSE,
        )
        return detect_spending_anomalies(expenses, filters)
