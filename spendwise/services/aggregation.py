"""Category breakdown of expenses."""

from collections.abc import Iterable
from decimal import Decimal

from spendwise.schemas.analytics import AnalyticsFilters, CategorySpend
from spendwise.schemas.transaction import TransactionRecord, TransactionType
from spendwise.services.filtering import (
    filter_transactions_by_category,
    filter_transactions_by_date_range,
)


def aggregate_category_spends(
    transactions: Iterable[TransactionRecord],
    filters: AnalyticsFilters,
) -> list[CategorySpend]:
    """Group expense transactions by category with totals and percentage share.

    Entries come back in the order each category was first seen; use
    ``sort_category_spends_by_amount`` for presentation order. When the
    grand total is zero every percentage is 0.
    """
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    expenses = filter_transactions_by_date_range(expenses, filters.start_date, filters.end_date)
    expenses = filter_transactions_by_category(expenses, filters.category_ids)

    # dicts keep insertion order, which gives the documented default order
    groups: dict[str | None, dict] = {}
    for txn in expenses:
        entry = groups.setdefault(
            txn.category_id,
            {"total": Decimal("0"), "count": 0, "name": txn.category_name},
        )
        entry["total"] += txn.amount
        entry["count"] += 1
        entry["name"] = txn.category_name

    grand_total = sum((e["total"] for e in groups.values()), Decimal("0"))

    return [
        CategorySpend(
            category_id=category_id,
            category_name=entry["name"],
            total_amount=entry["total"],
            transaction_count=entry["count"],
            percentage=float(entry["total"] / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category_id, entry in groups.items()
    ]


def sort_category_spends_by_amount(
    spends: Iterable[CategorySpend],
    ascending: bool = False,
) -> list[CategorySpend]:
    """Return a new list ordered by total amount (largest first by default)."""
    return sorted(spends, key=lambda s: s.total_amount, reverse=not ascending)


def filter_category_spends_by_min_amount(
    spends: Iterable[CategorySpend],
    min_amount: Decimal,
) -> list[CategorySpend]:
    return [s for s in spends if s.total_amount >= min_amount]
