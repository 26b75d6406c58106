"""Read-only access to the transaction store.

The analytics services only depend on the ``TransactionStore`` protocol;
``SqlTransactionStore`` is the production adapter backed by SQLAlchemy.
"""

from collections.abc import Collection
from typing import Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from spendwise.core.exceptions import DataSourceError
from spendwise.models.category import Category
from spendwise.models.transaction import Transaction
from spendwise.schemas.transaction import (
    UNCATEGORIZED,
    DateRange,
    TransactionRecord,
    TransactionType,
)

logger = structlog.get_logger()


class TransactionStore(Protocol):
    async def query_transactions(
        self,
        owner_id: str,
        date_range: DateRange,
        type: TransactionType | None = None,
        category_ids: Collection[str] | None = None,
    ) -> list[TransactionRecord]:
        """Return the owner's transactions inside ``date_range``.

        ``type`` and ``category_ids`` narrow the result when given; an empty
        ``category_ids`` collection means no category restriction. Failures
        surface as ``DataSourceError``.
        """
        ...


class SqlTransactionStore:
    """Transaction store backed by the ``transactions`` table.

    Every query opens its own session so concurrent queries issued by one
    request never share a connection.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def query_transactions(
        self,
        owner_id: str,
        date_range: DateRange,
        type: TransactionType | None = None,
        category_ids: Collection[str] | None = None,
    ) -> list[TransactionRecord]:
        query = (
            select(Transaction, Category.name)
            .outerjoin(Category, Transaction.category_id == Category.id)
            .where(
                Transaction.owner_id == owner_id,
                Transaction.deleted_at.is_(None),
                Transaction.date >= date_range.start,
                Transaction.date <= date_range.end,
            )
            .order_by(Transaction.date, Transaction.created_at)
        )
        if type is not None:
            query = query.where(Transaction.type == type.value)
        if category_ids:
            query = query.where(Transaction.category_id.in_(list(category_ids)))

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "store_query_failed",
                owner_id=owner_id,
                start=date_range.start.isoformat(),
                end=date_range.end.isoformat(),
                error=str(e),
            )
            raise DataSourceError(f"Transaction query failed: {e.__class__.__name__}") from e

        return [
            TransactionRecord(
                id=txn.id,
                owner_id=txn.owner_id,
                category_id=txn.category_id,
                category_name=category_name or UNCATEGORIZED,
                amount=txn.amount,
                type=TransactionType(txn.type),
                date=txn.date,
                created_at=txn.created_at,
                description=txn.description,
            )
            for txn, category_name in rows
        ]
