"""Shared test fixtures."""

import asyncio
import itertools
from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from spendwise.api.deps import get_analytics_service
from spendwise.core.security import create_access_token
from spendwise.main import app
from spendwise.schemas.transaction import DateRange, TransactionRecord, TransactionType
from spendwise.services.analytics_service import AnalyticsService

TODAY = date(2025, 6, 15)
OWNER_ID = "owner-1"


class FakeTransactionStore:
    """In-memory transaction store honouring the query contract."""

    def __init__(self, transactions=(), fail_with: Exception | None = None):
        self.transactions = list(transactions)
        self.fail_with = fail_with
        self.calls = []

    async def query_transactions(self, owner_id, date_range: DateRange, type=None, category_ids=None):
        self.calls.append({"owner_id": owner_id, "date_range": date_range, "type": type, "category_ids": category_ids})
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        return [
            t
            for t in self.transactions
            if t.owner_id == owner_id
            and t.date in date_range
            and (type is None or t.type == type)
            and (not category_ids or t.category_id in category_ids)
        ]


@pytest.fixture
def make_txn():
    """Factory for transaction records with sensible defaults."""
    counter = itertools.count(1)

    def _make(
        amount,
        day: date = TODAY,
        type: str = "expense",
        category_id: str | None = "food",
        category_name: str = "Food",
        owner_id: str = OWNER_ID,
    ) -> TransactionRecord:
        return TransactionRecord(
            id=f"txn-{next(counter)}",
            owner_id=owner_id,
            category_id=category_id,
            category_name=category_name,
            amount=Decimal(str(amount)),
            type=TransactionType(type),
            date=day,
        )

    return _make


@pytest.fixture
def store():
    return FakeTransactionStore()


@pytest.fixture
def service(store):
    return AnalyticsService(store, today=lambda: TODAY)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(OWNER_ID)}"}


@pytest.fixture
async def client(store):
    """Async test client for the FastAPI app, backed by the fake store."""
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(store, today=lambda: TODAY)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
