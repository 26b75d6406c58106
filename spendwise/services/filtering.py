"""Analysis-window validation and transaction filtering helpers."""

from collections.abc import Collection, Iterable
from datetime import date

from spendwise.config import settings
from spendwise.core.exceptions import InvalidRangeError, RangeTooLargeError
from spendwise.schemas.analytics import AnalyticsFilters
from spendwise.schemas.transaction import TransactionRecord, TransactionTypeFilter


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def validate_date_range(
    start_date: date,
    end_date: date,
    max_years: int | None = None,
) -> None:
    """Reject inverted windows and windows longer than ``max_years``.

    Raises ``InvalidRangeError`` or ``RangeTooLargeError``; both are
    ``ValidationError`` subclasses and are raised before any store access.
    """
    max_years = settings.max_range_years if max_years is None else max_years

    if start_date > end_date:
        raise InvalidRangeError()

    if start_date < years_before(end_date, max_years):
        raise RangeTooLargeError(max_years)


def validate_filters(filters: AnalyticsFilters) -> None:
    validate_date_range(filters.start_date, filters.end_date)


def filter_transactions_by_date_range(
    transactions: Iterable[TransactionRecord],
    start_date: date,
    end_date: date,
) -> list[TransactionRecord]:
    return [t for t in transactions if start_date <= t.date <= end_date]


def filter_transactions_by_category(
    transactions: Iterable[TransactionRecord],
    category_ids: Collection[str] | None,
) -> list[TransactionRecord]:
    if not category_ids:
        return list(transactions)
    return [t for t in transactions if t.category_id in category_ids]


def filter_transactions_by_type(
    transactions: Iterable[TransactionRecord],
    transaction_type: TransactionTypeFilter | str,
) -> list[TransactionRecord]:
    transaction_type = TransactionTypeFilter(transaction_type)
    if transaction_type == TransactionTypeFilter.ALL:
        return list(transactions)
    return [t for t in transactions if t.type.value == transaction_type.value]


def apply_filters(
    transactions: Iterable[TransactionRecord],
    filters: AnalyticsFilters,
) -> list[TransactionRecord]:
    """Apply the date window, category subset and type subset in turn."""
    filtered = filter_transactions_by_date_range(transactions, filters.start_date, filters.end_date)
    filtered = filter_transactions_by_category(filtered, filters.category_ids)
    return filter_transactions_by_type(filtered, filters.transaction_type)
