"""Calendar-month helpers."""

import calendar
from datetime import date

from spendwise.schemas.transaction import DateRange

MONTH_LABEL_FORMAT = "%b %Y"


def shift_month(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day``'s month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def max_months_back(today: date) -> int:
    """Longest trailing series ending at today's month whose first month is still representable."""
    return (today.year - date.min.year) * 12 + today.month


def month_bounds(day: date) -> DateRange:
    """Closed range from the first to the last day of ``day``'s month."""
    last_day = calendar.monthrange(day.year, day.month)[1]
    return DateRange(start=day.replace(day=1), end=day.replace(day=last_day))


def month_label(day: date) -> str:
    return day.strftime(MONTH_LABEL_FORMAT)


def trailing_month_windows(today: date, months_back: int) -> list[DateRange]:
    """``months_back`` calendar months ending with today's month, oldest first."""
    return [month_bounds(shift_month(today, -offset)) for offset in range(months_back - 1, -1, -1)]
