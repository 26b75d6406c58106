"""Shared API dependencies."""

from fastapi import Depends

from spendwise.core.database import async_session_factory
from spendwise.core.security import get_current_owner_id
from spendwise.services.analytics_service import AnalyticsService
from spendwise.services.transaction_store import SqlTransactionStore, TransactionStore


def get_transaction_store() -> TransactionStore:
    return SqlTransactionStore(async_session_factory)


def get_analytics_service(store: TransactionStore = Depends(get_transaction_store)) -> AnalyticsService:
    return AnalyticsService(store)


__all__ = ["get_analytics_service", "get_current_owner_id", "get_transaction_store"]
