"""Per-category statistical outlier detection on expenses."""

from collections.abc import Iterable
from decimal import Decimal

import numpy as np

from spendwise.schemas.analytics import AnalyticsFilters, SpendingAnomaly
from spendwise.schemas.transaction import TransactionRecord, TransactionType
from spendwise.services.filtering import filter_transactions_by_date_range

STDDEV_THRESHOLD = 2.0
MEAN_RATIO_THRESHOLD = 1.5
MIN_CATEGORY_SAMPLES = 2


def category_baseline(amounts: Iterable[Decimal]) -> tuple[float, float]:
    """Population mean and stddev of ``amounts`` ((0.0, 0.0) when empty)."""
    values = np.asarray([float(a) for a in amounts], dtype=np.float64)
    if values.size == 0:
        return 0.0, 0.0
    return float(values.mean()), float(values.std())  # std: ddof=0


def detect_spending_anomalies(
    transactions: Iterable[TransactionRecord],
    filters: AnalyticsFilters,
) -> list[SpendingAnomaly]:
    """Flag expenses far above their own category's mean in this window.

    A transaction is an anomaly when its amount exceeds both
    ``mean + 2 * stddev`` and ``1.5 * mean`` of its category, using the
    population statistics of the window's expenses in that category only.
    Categories with a single transaction never yield anomalies. Results
    are ordered most recent first.
    """
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    expenses = filter_transactions_by_date_range(expenses, filters.start_date, filters.end_date)

    by_category: dict[str, list[TransactionRecord]] = {}
    for txn in expenses:
        by_category.setdefault(txn.category_name, []).append(txn)

    anomalies = []
    for category_name, group in by_category.items():
        if len(group) < MIN_CATEGORY_SAMPLES:
            continue

        mean, std = category_baseline(t.amount for t in group)
        if mean <= 0:
            continue

        for txn in group:
            amount = float(txn.amount)
            if amount > mean + STDDEV_THRESHOLD * std and amount > mean * MEAN_RATIO_THRESHOLD:
                anomalies.append(
                    SpendingAnomaly(
                        date=txn.date,
                        category_name=category_name,
                        amount=txn.amount,
                        percentage_above_average=(amount - mean) / mean * 100,
                    )
                )

    # stable: equal dates keep store order
    anomalies.sort(key=lambda a: a.date, reverse=True)
    return anomalies
