"""Forward projection of monthly income and expenses."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

import structlog

from spendwise.config import settings
from spendwise.core.exceptions import ValidationError
from spendwise.schemas.analytics import ForecastProjection, MonthlyTrend
from spendwise.services.transaction_store import TransactionStore
from spendwise.services.trend_service import TrendService
from spendwise.utils.dates import month_label, shift_month

logger = structlog.get_logger()

BASE_CONFIDENCE = Decimal("0.7")
CONFIDENCE_DECAY = Decimal("0.1")


def _mean(values: list[Decimal]) -> Decimal:
    if not values:
        return Decimal("0")
    return sum(values, Decimal("0")) / len(values)


def _endpoint_slope(values: list[Decimal]) -> Decimal:
    """Change per month between the first and the last point (0 below two points)."""
    if len(values) <= 1:
        return Decimal("0")
    return (values[-1] - values[0]) / (len(values) - 1)


def projection_confidence(horizon: int) -> float:
    """``0.7 - 0.1 * horizon``. Not clamped: zero at 7 months, negative beyond."""
    return float(BASE_CONFIDENCE - CONFIDENCE_DECAY * horizon)


def project_from_history(
    history: list[MonthlyTrend],
    months_ahead: int,
    today: date,
) -> list[ForecastProjection]:
    """Extrapolate ``months_ahead`` months from a trend series.

    Uses the series average plus the endpoint slope times the horizon,
    floored at zero for income and expenses. Values are left unrounded.
    """
    incomes = [t.income for t in history]
    expenses = [t.expenses for t in history]

    avg_income, avg_expenses = _mean(incomes), _mean(expenses)
    income_slope, expense_slope = _endpoint_slope(incomes), _endpoint_slope(expenses)

    projections = []
    for i in range(1, months_ahead + 1):
        projected_income = max(Decimal("0"), avg_income + income_slope * i)
        projected_expenses = max(Decimal("0"), avg_expenses + expense_slope * i)
        projections.append(
            ForecastProjection(
                month=month_label(shift_month(today, i)),
                projected_income=projected_income,
                projected_expenses=projected_expenses,
                projected_balance=projected_income - projected_expenses,
                confidence=projection_confidence(i),
            )
        )
    return projections


class ForecastService:
    def __init__(self, store: TransactionStore, today: Callable[[], date] = date.today):
        self.today = today
        self.trends = TrendService(store, today=today)

    async def project(self, owner_id: str, months_ahead: int) -> list[ForecastProjection]:
        """Project the next ``months_ahead`` months (1 to 12) from the trailing year."""
        if not 1 <= months_ahead <= settings.forecast_max_months:
            raise ValidationError(f"months must be between 1 and {settings.forecast_max_months}")

        history = await self.trends.build_monthly_trends(owner_id, settings.forecast_history_months)
        projections = project_from_history(history, months_ahead, self.today())

        logger.info(
            "forecast_projected",
            owner_id=owner_id,
            months_ahead=months_ahead,
            history_months=len(history),
        )
        return projections
