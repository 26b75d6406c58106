"""Forecast API routes."""

from fastapi import APIRouter, Depends, Query

from spendwise.api.deps import get_analytics_service, get_current_owner_id
from spendwise.config import settings
from spendwise.schemas.analytics import ForecastProjection
from spendwise.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/projections", response_model=list[ForecastProjection])
async def forecast_projections(
    months: int = Query(3, ge=1, le=settings.forecast_max_months),
    owner_id: str = Depends(get_current_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Project income, expenses and balance for the next ``months`` months."""
    return await service.get_forecast_projections(owner_id, months)
