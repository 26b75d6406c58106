"""Analytics API routes: full analytics payload, category breakdown, trends."""

from fastapi import APIRouter, Depends, Query

from spendwise.api.deps import get_analytics_service, get_current_owner_id
from spendwise.schemas.analytics import AnalyticsData, AnalyticsFilters, CategorySpend, MonthlyTrend
from spendwise.schemas.transaction import TransactionRecord
from spendwise.services.aggregation import sort_category_spends_by_amount
from spendwise.services.analytics_service import AnalyticsService

router = APIRouter()


@router.post("/data", response_model=AnalyticsData)
async def analytics_data(
    filters: AnalyticsFilters,
    owner_id: str = Depends(get_current_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get category spends, totals, top expenses, anomalies and the 12-month trend.

    Category spends are returned in first-seen order.
    """
    return await service.get_analytics(owner_id, filters)


@router.post("/categories", response_model=list[CategorySpend])
async def category_spends(
    filters: AnalyticsFilters,
    owner_id: str = Depends(get_current_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get expenses broken down by category, ordered by total desc."""
    spends = await service.get_category_spends(owner_id, filters)
    return sort_category_spends_by_amount(spends)


@router.post("/transactions", response_model=list[TransactionRecord])
async def filtered_transactions(
    filters: AnalyticsFilters,
    owner_id: str = Depends(get_current_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get the transactions matching the date window, categories and type."""
    return await service.get_filtered_transactions(owner_id, filters)


@router.get("/trends", response_model=list[MonthlyTrend])
async def monthly_trends(
    months: int = Query(12, ge=1),
    owner_id: str = Depends(get_current_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get income/expenses/net for the trailing ``months`` calendar months, oldest first."""
    return await service.get_monthly_trends(owner_id, months)
